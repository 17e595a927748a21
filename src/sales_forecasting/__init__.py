"""Sales forecasting toolkit powered by a small feed-forward regression model."""

from .coercion import InvalidRowError, LenientCoercion, StrictCoercion
from .data import encode_features, load_sales_rows, normalize_rows
from .forecast import ForecastPoint, forecast_horizon
from .models import FittedModel, TrainerConfig, train_model
from .pipeline import ForecastConfig, RunContext, run_forecast
from .series import Series, merge_series, to_chart_data
from .session import ForecastSession, PipelineBusyError

__all__ = [
    "FittedModel",
    "ForecastConfig",
    "ForecastPoint",
    "ForecastSession",
    "InvalidRowError",
    "LenientCoercion",
    "PipelineBusyError",
    "RunContext",
    "Series",
    "StrictCoercion",
    "TrainerConfig",
    "encode_features",
    "forecast_horizon",
    "load_sales_rows",
    "merge_series",
    "normalize_rows",
    "run_forecast",
    "to_chart_data",
    "train_model",
]

__version__ = "0.1.0"
