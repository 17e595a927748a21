"""Merge actual and forecast quantities into one labeled display series."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .data import TARGET_COLUMN
from .forecast import CATEGORIES, HORIZON, ForecastPoint, horizon_pairs

logger = logging.getLogger(__name__)

PRODUCT_LABELS: Dict[int, str] = {0: "Product A", 1: "Product B"}

ACTUAL_DATASET = "Actual Sales"
PREDICTED_DATASET = "Predicted Sales"
X_AXIS_TITLE = "Months"
Y_AXIS_TITLE = "Quantity Sold"


@dataclass(frozen=True)
class Series:
    labels: List[str]
    actual: List[float]
    predicted: List[Optional[float]]


def month_label(period) -> str:
    if pd.isna(period):
        return "Month NaN"
    return f"Month {int(period)}"


def merge_series(
    training_set: pd.DataFrame,
    forecast: Sequence[ForecastPoint],
    horizon: int = HORIZON,
    categories: Sequence[int] = CATEGORIES,
) -> Series:
    """Build the actual-vs-predicted series.

    Labels are the per-row actual labels followed by the fixed horizon labels,
    so ``len(labels) == len(training_set) + horizon * len(categories)``. The
    label axis is not aligned one-to-one with either value sequence.
    """
    actual_labels = [month_label(period) for period in training_set["period"]]
    actual = [float(value) for value in training_set[TARGET_COLUMN]]

    lookup: Dict[Tuple[int, int], float] = {
        (point.period, point.category): point.predicted_quantity for point in forecast
    }
    predicted: List[Optional[float]] = []
    predicted_labels: List[str] = []
    for period, category in horizon_pairs(horizon, categories):
        predicted.append(lookup.get((period, category)))
        product = PRODUCT_LABELS.get(category, f"Product {category}")
        predicted_labels.append(f"Month {period} {product}")

    series = Series(labels=actual_labels + predicted_labels, actual=actual, predicted=predicted)
    logger.debug("Actual data: %s", series.actual)
    logger.debug("Predicted data: %s", series.predicted)
    return series


def _json_value(value: Optional[float]) -> Optional[float]:
    if value is None or math.isnan(value):
        return None
    return value


def to_chart_data(series: Series) -> dict:
    return {
        "labels": list(series.labels),
        "datasets": [
            {
                "label": ACTUAL_DATASET,
                "data": [_json_value(value) for value in series.actual],
                "borderColor": "blue",
                "fill": False,
            },
            {
                "label": PREDICTED_DATASET,
                "data": [_json_value(value) for value in series.predicted],
                "borderColor": "red",
                "fill": False,
            },
        ],
        "axes": {"x": X_AXIS_TITLE, "y": Y_AXIS_TITLE},
    }
