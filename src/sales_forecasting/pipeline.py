from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import pandas as pd

from .coercion import CoercionPolicy, LenientCoercion
from .data import RawRows, encode_features, normalize_rows
from .forecast import CATEGORIES, HORIZON, ForecastPoint, forecast_horizon
from .models import FittedModel, TrainerConfig, train_model
from .series import Series, merge_series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastConfig:
    horizon: int = HORIZON
    categories: Tuple[int, ...] = CATEGORIES
    trainer: TrainerConfig = field(default_factory=TrainerConfig)
    policy: CoercionPolicy = field(default_factory=LenientCoercion)

    def __post_init__(self) -> None:
        if self.horizon < 1:
            raise ValueError("horizon must be a positive integer.")
        if not self.categories:
            raise ValueError("At least one category must be provided.")


@dataclass(frozen=True)
class RunContext:
    """Everything one pipeline run produced; replaced wholesale by the next run."""

    training_set: pd.DataFrame
    model: FittedModel
    forecast: List[ForecastPoint]
    series: Series


def run_forecast(rows: RawRows, config: ForecastConfig | None = None) -> RunContext:
    """Normalize, encode, train, forecast and merge in one all-or-nothing run."""
    if config is None:
        config = ForecastConfig()

    training_set = normalize_rows(rows, config.policy)
    features, target = encode_features(training_set)
    model = train_model(features, target, config.trainer)
    forecast = forecast_horizon(model, config.horizon, config.categories)
    series = merge_series(training_set, forecast, config.horizon, config.categories)

    logger.info(
        "Forecast run complete: %d training row(s), %d forecast point(s)",
        len(training_set),
        len(forecast),
    )
    return RunContext(training_set=training_set, model=model, forecast=forecast, series=series)
