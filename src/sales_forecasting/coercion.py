"""Coercion policies that turn raw text columns into numeric feature columns."""

from __future__ import annotations

import logging
from typing import List, Protocol

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

PRODUCT_A = "Product A"

# Leading numeric prefix, e.g. "12.5kg" -> "12.5"
_NUMERIC_PREFIX = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"


class CoercionPolicy(Protocol):
    def period(self, values: pd.Series) -> pd.Series: ...

    def category(self, values: pd.Series) -> pd.Series: ...

    def quantity(self, values: pd.Series) -> pd.Series: ...


class InvalidRowError(ValueError):
    def __init__(self, field: str, positions: List[int]) -> None:
        self.field = field
        self.positions = positions
        super().__init__(f"Could not coerce {field} for rows at positions {positions}")


def _month(value):
    if pd.isna(value):
        return pd.NA
    # Parsed per value so an offset-bearing timestamp keeps its own wall-clock month.
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return pd.NA
    return parsed.month


class LenientCoercion:
    """Never raises: unparseable values become NA/NaN and flow downstream."""

    def period(self, values: pd.Series) -> pd.Series:
        return pd.Series([_month(value) for value in values], index=values.index, dtype="Int64")

    def category(self, values: pd.Series) -> pd.Series:
        # Closed two-class scheme: every name other than PRODUCT_A collapses to 1.
        return pd.Series(np.where(values.eq(PRODUCT_A), 0, 1), index=values.index, dtype=int)

    def quantity(self, values: pd.Series) -> pd.Series:
        prefix = values.fillna("").astype(str).str.extract(_NUMERIC_PREFIX, expand=False)
        return pd.to_numeric(prefix, errors="coerce").astype(float)


class StrictCoercion(LenientCoercion):
    """Rejects any row whose period or quantity cannot be coerced."""

    def period(self, values: pd.Series) -> pd.Series:
        return self._reject_missing("period", super().period(values))

    def quantity(self, values: pd.Series) -> pd.Series:
        return self._reject_missing("quantity", super().quantity(values))

    @staticmethod
    def _reject_missing(field: str, coerced: pd.Series) -> pd.Series:
        missing = coerced.isna().to_numpy()
        if missing.any():
            positions = np.flatnonzero(missing).tolist()
            logger.warning("Rejecting %d row(s) with invalid %s", len(positions), field)
            raise InvalidRowError(field, positions)
        return coerced
