from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class FitReport:
    rows: int
    scored_rows: int
    mse: float
    wmape: float


def fit_report(actual: np.ndarray, fitted: np.ndarray) -> FitReport:
    """In-sample error over the rows where both actual and fitted values are numeric."""
    actual_arr = np.asarray(actual, dtype=float).ravel()
    fitted_arr = np.asarray(fitted, dtype=float).ravel()
    scored = ~(np.isnan(actual_arr) | np.isnan(fitted_arr))
    if not scored.any():
        return FitReport(rows=actual_arr.size, scored_rows=0, mse=np.nan, wmape=np.nan)

    errors = actual_arr[scored] - fitted_arr[scored]
    volume = np.abs(actual_arr[scored]).sum()
    return FitReport(
        rows=actual_arr.size,
        scored_rows=int(scored.sum()),
        mse=float(np.mean(errors**2)),
        wmape=float(np.abs(errors).sum() / volume) if volume else np.nan,
    )
