from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np
from sklearn.exceptions import ConvergenceWarning
from sklearn.neural_network import MLPRegressor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrainerConfig:
    hidden_units: int = 10
    epochs: int = 100
    learning_rate: float = 0.001
    random_state: int = 42

    def __post_init__(self) -> None:
        if self.hidden_units < 1:
            raise ValueError("hidden_units must be a positive integer.")
        if self.epochs < 1:
            raise ValueError("epochs must be a positive integer.")
        if self.learning_rate <= 0:
            raise ValueError("learning_rate must be positive.")


@dataclass(frozen=True)
class FittedModel:
    """Trained (period, category) -> quantity regressor, read-only after fit.

    A model fit on data containing NaN carries no estimator: full-batch
    gradients are NaN-poisoned, so every prediction is NaN.
    """

    estimator: Optional[MLPRegressor]
    final_loss: float

    @property
    def poisoned(self) -> bool:
        return self.estimator is None

    def predict(self, period: float, category: float) -> float:
        return float(self.predict_many([(period, category)])[0])

    def predict_many(self, pairs: Iterable[Tuple[float, float]]) -> np.ndarray:
        matrix = np.asarray(list(pairs), dtype=float).reshape(-1, 2)
        if self.estimator is None:
            return np.full(matrix.shape[0], np.nan)
        return self.estimator.predict(matrix).astype(float)


def build_regressor(n_samples: int, config: TrainerConfig) -> MLPRegressor:
    # Full-batch Adam for a fixed number of passes; tolerance stopping can
    # never trigger because n_iter_no_change equals the pass count.
    return MLPRegressor(
        hidden_layer_sizes=(config.hidden_units,),
        activation="relu",
        solver="adam",
        alpha=0.0,
        batch_size=n_samples,
        learning_rate_init=config.learning_rate,
        max_iter=config.epochs,
        n_iter_no_change=config.epochs,
        early_stopping=False,
        shuffle=False,
        random_state=config.random_state,
    )


def train_model(features: np.ndarray, target: np.ndarray, config: TrainerConfig | None = None) -> FittedModel:
    if config is None:
        config = TrainerConfig()
    features = np.asarray(features, dtype=float)
    target = np.asarray(target, dtype=float).ravel()
    if features.shape[0] == 0:
        raise ValueError("Cannot train on an empty training set.")
    if features.shape[0] != target.shape[0]:
        raise ValueError(
            f"Feature rows ({features.shape[0]}) and target rows ({target.shape[0]}) differ."
        )
    if np.isnan(target).all():
        raise ValueError("Target vector contains no numeric values.")

    invalid_rows = int((np.isnan(features).any(axis=1) | np.isnan(target)).sum())
    if invalid_rows:
        # NaN rows stay in the batch, so the fit degrades instead of failing.
        logger.warning(
            "%d of %d training row(s) contain NaN; model predictions will be NaN",
            invalid_rows,
            features.shape[0],
        )
        return FittedModel(estimator=None, final_loss=float("nan"))

    logger.info("Training regressor on %d row(s) for %d epoch(s)", features.shape[0], config.epochs)
    regressor = build_regressor(features.shape[0], config)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ConvergenceWarning)
        regressor.fit(features, target)

    # sklearn reports half the mean squared error
    final_loss = float(regressor.loss_curve_[-1] * 2)
    logger.info("Model trained; final MSE %.4f", final_loss)
    return FittedModel(estimator=regressor, final_loss=final_loss)
