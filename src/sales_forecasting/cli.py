from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .coercion import LenientCoercion, StrictCoercion
from .data import encode_features, load_sales_rows
from .metrics import fit_report
from .models import TrainerConfig
from .pipeline import ForecastConfig, RunContext, run_forecast
from .series import PRODUCT_LABELS, to_chart_data


def forecast_frame(context: RunContext) -> pd.DataFrame:
    return pd.DataFrame.from_records(
        [
            {
                "period": point.period,
                "product": PRODUCT_LABELS.get(point.category, str(point.category)),
                "category": point.category,
                "predicted_quantity": point.predicted_quantity,
            }
            for point in context.forecast
        ]
    )


def summarize_run(context: RunContext) -> str:
    features, target = encode_features(context.training_set)
    report = fit_report(target, context.model.predict_many(features))

    lines: list[str] = []
    lines.append(f"Training rows: {report.rows} ({report.scored_rows} scored)")
    if context.model.poisoned:
        lines.append("Model poisoned by NaN training rows; predictions are NaN.")
    else:
        lines.append(f"Final training MSE: {context.model.final_loss:.4f}")
    if pd.isna(report.wmape):
        lines.append("In-sample WMAPE: n/a")
    else:
        lines.append(f"In-sample WMAPE: {report.wmape:.4f}")
    lines.append("\nForecast:")
    lines.append(forecast_frame(context).to_string(index=False, float_format=lambda x: f"{x:.2f}"))
    return "\n".join(lines)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Monthly sales forecasting with a small feed-forward regression model.",
    )
    parser.add_argument(
        "--sales-path",
        type=Path,
        required=True,
        help="Path to the input sales CSV (columns: sales_date, product_description, quantity_sold).",
    )
    parser.add_argument(
        "--epochs",
        type=int,
        default=100,
        help="Number of full-batch training passes (default: 100).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for weight initialisation (default: 42).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject rows with unparseable dates or quantities instead of passing NaN through.",
    )
    parser.add_argument(
        "--series-output",
        type=Path,
        help="Optional path to write the actual-vs-predicted chart data as JSON.",
    )
    parser.add_argument(
        "--forecast-output",
        type=Path,
        help="Optional path to write forecast points as CSV.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    logger = logging.getLogger("sales_forecasting")

    try:
        config = ForecastConfig(
            trainer=TrainerConfig(epochs=args.epochs, random_state=args.seed),
            policy=StrictCoercion() if args.strict else LenientCoercion(),
        )
        rows = load_sales_rows(args.sales_path)
        context = run_forecast(rows, config)
    except Exception as exc:  # noqa: BLE001
        logger.error("Forecast run failed: %s", exc)
        sys.exit(1)

    print(summarize_run(context))

    if args.series_output:
        with open(args.series_output, "w", encoding="utf-8") as handle:
            json.dump(to_chart_data(context.series), handle, indent=2)
        print(f"\nSaved chart data to {args.series_output}")

    if args.forecast_output:
        forecast_frame(context).to_csv(args.forecast_output, index=False)
        print(f"Saved forecasts to {args.forecast_output}")


if __name__ == "__main__":
    main()
