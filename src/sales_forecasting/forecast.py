from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .models import FittedModel

logger = logging.getLogger(__name__)

HORIZON = 6
CATEGORIES: Tuple[int, ...] = (0, 1)


@dataclass(frozen=True)
class ForecastPoint:
    period: int
    category: int
    predicted_quantity: float


def horizon_pairs(horizon: int = HORIZON, categories: Sequence[int] = CATEGORIES) -> Iterator[Tuple[int, int]]:
    """Yield (period, category) pairs period-major, category-minor."""
    for period in range(1, horizon + 1):
        for category in categories:
            yield period, category


def forecast_horizon(
    model: FittedModel,
    horizon: int = HORIZON,
    categories: Sequence[int] = CATEGORIES,
) -> List[ForecastPoint]:
    if horizon < 1:
        raise ValueError("horizon must be a positive integer.")

    points = [
        ForecastPoint(period=period, category=category, predicted_quantity=model.predict(period, category))
        for period, category in horizon_pairs(horizon, categories)
    ]
    logger.debug("Future predictions: %s", points)
    return points
