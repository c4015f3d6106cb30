"""
Regularized regression solvers.

The generator only depends on the RegressionSolver protocol, so the
numerical routine can be swapped (or stubbed in tests) without touching the
dictionary logic. CrossValidatedLasso is the default implementation, built
on scikit-learn's coordinate-descent path.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

import numpy as np
from scipy import sparse
from sklearn.linear_model import ElasticNet, ElasticNetCV
from sklearn.model_selection import KFold
from sklearn.preprocessing import StandardScaler

from sentiment_analysis.config.features.generation import GenerationConfig
from sentiment_analysis.exceptions import InsufficientDataError

logger = logging.getLogger(__name__)

RegularizationRule = Literal["min", "one_se"]

# Smallest alpha on the path, relative to the largest (same as scikit-learn's default)
ALPHA_PATH_EPS = 1e-3


@dataclass(frozen=True)
class SolverResult:
    """Coefficients at the selected strength plus the cross-validation curve."""
    coefficients: np.ndarray
    intercept: float
    alpha: float
    alpha_min: float
    alpha_1se: float
    alphas: np.ndarray
    cv_mean_error: np.ndarray
    cv_std_error: np.ndarray

    @property
    def cv_error(self) -> float:
        """Mean CV error at the selected alpha."""
        if len(self.alphas) == 0:
            return float("nan")
        return float(self.cv_mean_error[int(np.argmin(np.abs(self.alphas - self.alpha)))])


class RegressionSolver(Protocol):
    """Anything that fits coefficients for a matrix and a response."""

    def fit(
        self,
        matrix: sparse.spmatrix,
        response: np.ndarray,
        folds: int,
        rule: RegularizationRule,
    ) -> SolverResult:
        ...


def select_alpha(
    alphas: np.ndarray,
    mean_error: np.ndarray,
    std_error: np.ndarray,
    rule: RegularizationRule,
) -> tuple[float, float, float]:
    """
    Pick the regularization strength from a cross-validation curve.

    Args:
        alphas: Strengths in any order
        mean_error: Mean CV error per strength
        std_error: Standard error of the CV error per strength
        rule: "min" for the lowest mean error, "one_se" for the strongest
            regularization whose mean error is within one standard error of
            the minimum

    Returns:
        (selected alpha, alpha_min, alpha_1se)
    """
    i_min = int(np.argmin(mean_error))
    alpha_min = float(alphas[i_min])
    threshold = mean_error[i_min] + std_error[i_min]
    alpha_1se = float(np.max(alphas[mean_error <= threshold]))

    if rule == "min":
        return alpha_min, alpha_min, alpha_1se
    if rule == "one_se":
        return alpha_1se, alpha_min, alpha_1se
    raise ValueError(f"Unknown regularization rule: {rule!r}")


class CrossValidatedLasso:
    """
    L1 (or elastic-net) regression with the strength chosen by K-fold CV.

    1. Optionally scales each column to unit variance (no centering, so the
       matrix stays sparse)
    2. Computes the alpha path from the largest useful strength downwards
    3. Runs ElasticNetCV over shuffled folds and keeps the per-fold errors
    4. Selects alpha by rule and refits on all documents
    5. Maps coefficients back to the unscaled columns

    Usage:
        solver = CrossValidatedLasso(random_state=42)
        result = solver.fit(X, y, folds=10, rule="one_se")
    """

    def __init__(
        self,
        l1_ratio: float = 1.0,
        n_alphas: int = 100,
        max_iter: int = 10000,
        tol: float = 1e-4,
        standardize: bool = True,
        random_state: Optional[int] = 42,
    ):
        self.l1_ratio = l1_ratio
        self.n_alphas = n_alphas
        self.max_iter = max_iter
        self.tol = tol
        self.standardize = standardize
        self.random_state = random_state

    @classmethod
    def from_config(cls, config: GenerationConfig, random_state: Optional[int] = None) -> 'CrossValidatedLasso':
        return cls(
            l1_ratio=config.l1_ratio,
            n_alphas=config.n_alphas,
            max_iter=config.max_iter,
            tol=config.tol,
            standardize=config.standardize,
            random_state=random_state,
        )

    def alpha_grid(self, X: sparse.spmatrix, y: np.ndarray) -> np.ndarray:
        """Log-spaced strengths from alpha_max (all coefficients zero) downwards."""
        n = X.shape[0]
        y_centered = y - y.mean()
        # Centering X does not change X^T y_c because y_c sums to zero
        alpha_max = float(np.max(np.abs(X.T @ y_centered))) / (n * self.l1_ratio) if X.shape[1] else 0.0
        if alpha_max <= 0:
            return np.asarray([], dtype=float)
        return np.logspace(
            np.log10(alpha_max), np.log10(alpha_max * ALPHA_PATH_EPS), num=self.n_alphas
        )

    def fit(
        self,
        matrix: sparse.spmatrix,
        response: np.ndarray,
        folds: int,
        rule: RegularizationRule = "one_se",
    ) -> SolverResult:
        """
        Fit the model and select the regularization strength.

        Raises:
            InsufficientDataError: If there are fewer documents than folds
        """
        X = sparse.csr_matrix(matrix, dtype=np.float64)
        y = np.asarray(response, dtype=np.float64)
        n_samples, n_features = X.shape

        if n_samples < folds:
            raise InsufficientDataError(
                required=folds,
                available=n_samples,
                reason=f"{folds}-fold cross-validation needs at least one document per fold",
            )

        scale = np.ones(n_features)
        if self.standardize and n_features:
            scaler = StandardScaler(with_mean=False)
            X = sparse.csr_matrix(scaler.fit_transform(X))
            scale = scaler.scale_

        alphas = self.alpha_grid(X, y)
        if len(alphas) == 0:
            logger.warning("Response is constant or uncorrelated with every term; all coefficients are zero")
            empty = np.asarray([], dtype=float)
            return SolverResult(
                coefficients=np.zeros(n_features),
                intercept=float(y.mean()),
                alpha=0.0,
                alpha_min=0.0,
                alpha_1se=0.0,
                alphas=empty,
                cv_mean_error=empty,
                cv_std_error=empty,
            )

        cv = KFold(n_splits=folds, shuffle=True, random_state=self.random_state)
        logger.info(
            f"Cross-validating {len(alphas)} strengths over {folds} folds "
            f"({n_samples} documents x {n_features} terms)"
        )
        cv_model = ElasticNetCV(
            l1_ratio=self.l1_ratio,
            alphas=alphas,
            cv=cv,
            max_iter=self.max_iter,
            tol=self.tol,
        )
        cv_model.fit(X, y)

        path_alphas = np.asarray(cv_model.alphas_, dtype=float)
        mse_path = np.asarray(cv_model.mse_path_, dtype=float)
        mean_error = mse_path.mean(axis=1)
        std_error = mse_path.std(axis=1, ddof=1) / np.sqrt(folds)

        alpha, alpha_min, alpha_1se = select_alpha(path_alphas, mean_error, std_error, rule)
        logger.info(f"Selected alpha={alpha:.6g} by '{rule}' (min={alpha_min:.6g}, 1se={alpha_1se:.6g})")

        final = ElasticNet(
            alpha=alpha,
            l1_ratio=self.l1_ratio,
            max_iter=self.max_iter,
            tol=self.tol,
        )
        final.fit(X, y)

        return SolverResult(
            coefficients=np.asarray(final.coef_, dtype=float) / scale,
            intercept=float(final.intercept_),
            alpha=alpha,
            alpha_min=alpha_min,
            alpha_1se=alpha_1se,
            alphas=path_alphas,
            cv_mean_error=mean_error,
            cv_std_error=std_error,
        )
