import pytest

from sales_forecasting.data import encode_features, normalize_rows
from sales_forecasting.models import TrainerConfig, train_model

SAMPLE_ROWS = [
    {"sales_date": "2023-01-15", "product_description": "Product A", "quantity_sold": "10"},
    {"sales_date": "2023-02-10", "product_description": "Product B", "quantity_sold": "20"},
]


@pytest.fixture
def sample_rows():
    return [dict(row) for row in SAMPLE_ROWS]


@pytest.fixture
def fitted_model(sample_rows):
    features, target = encode_features(normalize_rows(sample_rows))
    return train_model(features, target, TrainerConfig(random_state=0))
