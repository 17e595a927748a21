import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .coercion import CoercionPolicy, LenientCoercion

logger = logging.getLogger(__name__)

DATE_COLUMN = "sales_date"
PRODUCT_COLUMN = "product_description"
QUANTITY_COLUMN = "quantity_sold"
RAW_COLUMNS: Sequence[str] = (DATE_COLUMN, PRODUCT_COLUMN, QUANTITY_COLUMN)

FEATURE_COLUMNS: Sequence[str] = ("period", "category")
TARGET_COLUMN = "quantity"

RawRows = Union[pd.DataFrame, Iterable[Mapping[str, Optional[str]]]]


def load_sales_rows(sales_path: Path) -> List[Dict[str, str]]:
    """Read a header-bearing CSV and return its rows as text mappings."""
    df = pd.read_csv(sales_path, dtype=str, keep_default_na=False)
    missing = set(RAW_COLUMNS) - set(df.columns)
    if missing:
        # Missing columns are not fatal; they coerce to NaN downstream.
        logger.warning("Sales data missing columns: %s", sorted(missing))
    rows = df.to_dict("records")
    logger.info("Loaded %d row(s) from %s", len(rows), sales_path)
    return rows


def normalize_rows(rows: RawRows, policy: Optional[CoercionPolicy] = None) -> pd.DataFrame:
    if policy is None:
        policy = LenientCoercion()

    if isinstance(rows, pd.DataFrame):
        raw = rows.reset_index(drop=True)
    else:
        raw = pd.DataFrame.from_records(list(rows))
    raw = raw.reindex(columns=list(RAW_COLUMNS)).astype(object)

    training_set = pd.DataFrame(
        {
            "period": policy.period(raw[DATE_COLUMN]),
            "category": policy.category(raw[PRODUCT_COLUMN]),
            TARGET_COLUMN: policy.quantity(raw[QUANTITY_COLUMN]),
        },
        index=raw.index,
    )
    logger.debug("Normalized rows:\n%s", training_set)
    return training_set


def encode_features(training_set: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray]:
    features = training_set[list(FEATURE_COLUMNS)].to_numpy(dtype=float, na_value=np.nan)
    target = training_set[TARGET_COLUMN].to_numpy(dtype=float).reshape(-1, 1)
    logger.debug("Encoded features %s and target %s", features.shape, target.shape)
    return features, target
