import json

import pandas as pd
import pytest

from sales_forecasting.cli import main


def _write_sales(path, body):
    path.write_text("sales_date,product_description,quantity_sold\n" + body, encoding="utf-8")
    return path


def test_cli_writes_chart_data_and_forecast(tmp_path, capsys):
    sales_path = _write_sales(
        tmp_path / "sales.csv",
        "2023-01-15,Product A,10\n2023-02-10,Product B,20\n",
    )
    series_path = tmp_path / "series.json"
    forecast_path = tmp_path / "forecast.csv"

    main(
        [
            "--sales-path",
            str(sales_path),
            "--epochs",
            "10",
            "--series-output",
            str(series_path),
            "--forecast-output",
            str(forecast_path),
        ]
    )

    output = capsys.readouterr().out
    assert "Training rows: 2" in output
    assert "In-sample WMAPE:" in output

    chart = json.loads(series_path.read_text(encoding="utf-8"))
    assert len(chart["labels"]) == 14
    assert [d["label"] for d in chart["datasets"]] == ["Actual Sales", "Predicted Sales"]
    assert len(chart["datasets"][1]["data"]) == 12

    forecast = pd.read_csv(forecast_path)
    assert len(forecast) == 12
    assert list(forecast.columns) == ["period", "product", "category", "predicted_quantity"]


def test_cli_exits_nonzero_when_training_fails(tmp_path):
    sales_path = _write_sales(tmp_path / "empty.csv", "")

    with pytest.raises(SystemExit) as excinfo:
        main(["--sales-path", str(sales_path)])

    assert excinfo.value.code == 1


def test_cli_strict_mode_rejects_bad_quantity(tmp_path):
    sales_path = _write_sales(tmp_path / "sales.csv", "2023-01-15,Product A,N/A\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["--sales-path", str(sales_path), "--strict"])

    assert excinfo.value.code == 1


def test_cli_completes_with_unparseable_quantity(tmp_path, capsys):
    sales_path = _write_sales(
        tmp_path / "sales.csv",
        "2023-01-15,Product A,10\n2023-02-10,Product B,N/A\n",
    )
    series_path = tmp_path / "series.json"

    main(["--sales-path", str(sales_path), "--series-output", str(series_path)])

    output = capsys.readouterr().out
    assert "Training rows: 2 (0 scored)" in output
    assert "predictions are NaN" in output
    chart = json.loads(series_path.read_text(encoding="utf-8"))
    assert len(chart["labels"]) == 14
    assert chart["datasets"][0]["data"] == [10.0, None]
    assert chart["datasets"][1]["data"] == [None] * 12
