"""Project path configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PathsConfig(BaseSettings):
    """
    Project path configuration.
    All paths are computed from project_root.
    """
    model_config = SettingsConfigDict(
        env_prefix='PATHS_',
        case_sensitive=False
    )

    # Project root directory (computed)
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)

    # Optional location of the Loughran-McDonald master dictionary CSV
    lm_master_csv: Optional[Path] = Field(default=None)

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    @property
    def dictionary_dir(self) -> Path:
        """Directory containing user-supplied dictionary CSV files"""
        return self.data_dir / "dictionary"

    @property
    def processed_data_dir(self) -> Path:
        return self.data_dir / "processed"

    @property
    def scores_dir(self) -> Path:
        """Score tables written by the CLI"""
        return self.processed_data_dir / "scores"

    @property
    def generated_dictionaries_dir(self) -> Path:
        """Dictionaries produced by the LASSO generator"""
        return self.processed_data_dir / "dictionaries"

    @property
    def logs_dir(self) -> Path:
        return self.project_root / "logs"

    @property
    def lm_dictionary_csv(self) -> Path:
        """Path to LM dictionary source CSV."""
        if self.lm_master_csv is not None:
            return self.lm_master_csv
        # Inline constant to avoid circular import with features module
        return self.dictionary_dir / "Loughran-McDonald_MasterDictionary_1993-2024.csv"

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        directories = [
            self.data_dir,
            self.dictionary_dir,
            self.processed_data_dir,
            self.scores_dir,
            self.generated_dictionaries_dir,
            self.logs_dir,
        ]
        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)
