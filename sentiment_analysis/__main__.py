"""
CLI entry point for dictionary-based sentiment analysis.

Output layout (when --output is not given):
    data/processed/
    ├── scores/{stem}_scores.{csv|json}         # score subcommand
    └── dictionaries/{NAME}.csv                 # generate subcommand

Usage:
    # Score a corpus with built-in and user dictionaries
    python -m sentiment_analysis score --input data/reviews.csv --text-column text
    python -m sentiment_analysis score --input data/reviews.csv --text-column text \\
        --dictionary GENERAL --dictionary-file data/dictionary/custom.csv --negation-window 2

    # Generate a dictionary from a response column
    python -m sentiment_analysis generate --input data/reviews.csv --text-column text \\
        --response-column rating --rule one_se --name REVIEWS

    # Compare score columns with the response
    python -m sentiment_analysis compare --input data/processed/scores/reviews_scores.csv \\
        --response-column rating --score-column GENERAL_net_sentiment

    python -m sentiment_analysis list-dictionaries
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from sentiment_analysis.config import settings, ensure_directories
from sentiment_analysis.exceptions import InvalidInputError, SentimentAnalysisError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Table I/O
# ---------------------------------------------------------------------------

def _read_table(path: Path) -> pd.DataFrame:
    """Read a CSV, JSON or JSON-lines table."""
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix in (".json", ".jsonl"):
        return pd.read_json(path, lines=suffix == ".jsonl")
    raise InvalidInputError(f"Unsupported input format {suffix!r}; use .csv, .json or .jsonl")


def _write_table(table: pd.DataFrame, path: Path, index: bool = False) -> Path:
    """Write a table as CSV or JSON, chosen by the file suffix."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        table.to_json(path, orient="records" if not index else "index", indent=2)
    else:
        table.to_csv(path, index=index)
    logger.info(f"Saved {len(table)} rows to {path}")
    return path


def _require_columns(table: pd.DataFrame, columns: List[str], path: Path) -> None:
    missing = [c for c in columns if c not in table.columns]
    if missing:
        raise InvalidInputError(f"{path} is missing column(s) {missing}; found {list(table.columns)}")


def _default_output(input_path: Path, suffix: str) -> Path:
    return settings.paths.scores_dir / f"{input_path.stem}_{suffix}.{settings.sentiment.output.format}"


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def cmd_score(args: argparse.Namespace) -> int:
    from sentiment_analysis.features.dictionaries import read_dictionary_csv
    from sentiment_analysis.features.sentiment import SentimentAnalyzer

    config = settings.sentiment
    if args.negation_window is not None:
        config = config.model_copy(
            update={"negation": config.negation.model_copy(update={"window": args.negation_window})}
        )
    if args.workers is not None:
        config = config.model_copy(
            update={"processing": config.processing.model_copy(update={"parallel_workers": args.workers})}
        )

    dictionaries: List = list(args.dictionary or [])
    dictionaries.extend(read_dictionary_csv(p) for p in (args.dictionary_file or []))

    table = _read_table(args.input)
    _require_columns(table, [args.text_column], args.input)
    texts = table[args.text_column].where(table[args.text_column].notna(), None).tolist()

    analyzer = SentimentAnalyzer(dictionaries=dictionaries or None, config=config)
    scores = analyzer.analyze(texts)
    scores.index = table.index

    output = args.output or _default_output(args.input, "scores")
    _write_table(pd.concat([table, scores], axis=1), output)
    print(f"Scored {len(scores)} documents with {', '.join(analyzer.dictionary_names)} -> {output}")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    from sentiment_analysis.features.dictionaries import write_dictionary_csv
    from sentiment_analysis.features.generation import DictionaryGenerator

    overrides = {
        "min_doc_freq": args.min_doc_freq,
        "cv_folds": args.cv_folds,
        "regularization_rule": args.rule,
        "parallel_workers": args.workers,
    }
    config = settings.generation.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    table = _read_table(args.input)
    _require_columns(table, [args.text_column, args.response_column], args.input)
    texts = table[args.text_column].where(table[args.text_column].notna(), None).tolist()

    generator = DictionaryGenerator(config=config)
    dictionary = generator.generate(texts, table[args.response_column].tolist(), name=args.name)

    output = args.output or settings.paths.generated_dictionaries_dir / f"{dictionary.name}.csv"
    write_dictionary_csv(dictionary, output)

    print(f"Generated {dictionary.name}: {len(dictionary)} terms -> {output}")
    if dictionary.info is not None:
        print(
            f"  alpha={dictionary.info.alpha:.6g} ({dictionary.info.regularization_rule}), "
            f"cv_error={dictionary.info.cv_error:.6g}, vocabulary={dictionary.info.vocabulary_size}"
        )
    for term, weight in sorted(dictionary.words.items(), key=lambda kv: -abs(kv[1]))[:args.top]:
        print(f"  {weight:+.6f}  {term}")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    from sentiment_analysis.features.comparison import compare_table

    table = _read_table(args.input)
    columns = args.score_column or None
    _require_columns(table, [args.response_column] + list(columns or []), args.input)

    if columns is None:
        columns = [
            c for c in table.select_dtypes(include="number").columns
            if c not in (args.response_column, "word_count")
        ]
    if not columns:
        raise InvalidInputError(f"{args.input} has no numeric score columns to compare")

    result = compare_table(
        table,
        table[args.response_column].tolist(),
        columns=columns,
        method=args.method,
        neutral_band=args.neutral_band,
    )
    print(result.to_string())

    if args.output:
        _write_table(result, args.output, index=True)
    return 0


def cmd_list_dictionaries(args: argparse.Namespace) -> int:
    from sentiment_analysis.features.dictionaries import DictionaryStore

    store = DictionaryStore.get_instance()
    for name in store.available():
        dictionary = store.get(name)
        print(
            f"{name:<10} {dictionary.kind:<9} {len(dictionary):>6} terms "
            f"(+{len(dictionary.positive_terms)} / -{len(dictionary.negative_terms)})  {dictionary.description}"
        )
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m sentiment_analysis",
        description="Dictionary-based sentiment scoring, generation and evaluation",
    )
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score documents against sentiment dictionaries")
    score.add_argument("--input", type=Path, required=True, help="CSV/JSON table of documents")
    score.add_argument("--text-column", default="text")
    score.add_argument("--dictionary", action="append", help="Built-in dictionary name (repeatable)")
    score.add_argument("--dictionary-file", action="append", type=Path,
                       help="Dictionary CSV with term,polarity or term,weight columns (repeatable)")
    score.add_argument("--negation-window", type=int, default=None)
    score.add_argument("--workers", type=int, default=None)
    score.add_argument("--output", type=Path, default=None)
    score.set_defaults(func=cmd_score)

    generate = sub.add_parser("generate", help="Generate a weighted dictionary from a response")
    generate.add_argument("--input", type=Path, required=True)
    generate.add_argument("--text-column", default="text")
    generate.add_argument("--response-column", required=True)
    generate.add_argument("--name", default="GENERATED")
    generate.add_argument("--min-doc-freq", type=int, default=None)
    generate.add_argument("--cv-folds", type=int, default=None)
    generate.add_argument("--rule", choices=["min", "one_se"], default=None)
    generate.add_argument("--workers", type=int, default=None)
    generate.add_argument("--top", type=int, default=20, help="Number of terms to print")
    generate.add_argument("--output", type=Path, default=None)
    generate.set_defaults(func=cmd_generate)

    compare = sub.add_parser("compare", help="Compare score columns with a response")
    compare.add_argument("--input", type=Path, required=True)
    compare.add_argument("--response-column", required=True)
    compare.add_argument("--score-column", action="append",
                         help="Score column (repeatable; default: all numeric columns)")
    compare.add_argument("--method", choices=["pearson", "spearman", "kendall"], default=None)
    compare.add_argument("--neutral-band", type=float, default=None)
    compare.add_argument("--output", type=Path, default=None)
    compare.set_defaults(func=cmd_compare)

    listing = sub.add_parser("list-dictionaries", help="Show the built-in dictionaries")
    listing.set_defaults(func=cmd_list_dictionaries)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if args.command in ("score", "generate") and args.output is None:
        ensure_directories()

    try:
        return args.func(args)
    except (SentimentAnalysisError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
