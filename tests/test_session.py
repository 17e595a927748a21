import asyncio

import pytest

from sales_forecasting.models import TrainerConfig
from sales_forecasting.pipeline import ForecastConfig
from sales_forecasting.session import ForecastSession, PipelineBusyError


def _session():
    return ForecastSession(ForecastConfig(trainer=TrainerConfig(epochs=10)))


def test_submit_replaces_last_run(sample_rows):
    session = _session()

    first = asyncio.run(session.submit(sample_rows))
    second = asyncio.run(session.submit(sample_rows))

    assert first is not second
    assert session.last_run is second
    assert not session.busy


def test_second_start_while_busy_is_rejected(sample_rows):
    session = _session()

    async def scenario():
        task = session.start(sample_rows)
        assert session.busy
        with pytest.raises(PipelineBusyError):
            session.start(sample_rows)
        return await task

    context = asyncio.run(scenario())

    assert session.last_run is context
    assert not session.busy


def test_failed_run_keeps_previous_result(sample_rows):
    session = _session()
    previous = asyncio.run(session.submit(sample_rows))

    with pytest.raises(ValueError):
        asyncio.run(session.submit([]))

    assert session.last_run is previous
    assert not session.busy
