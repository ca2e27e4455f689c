"""
Tests for the per-scrape Exporter.
"""

from unittest.mock import MagicMock

from apcupsd_exporter.apcupsd.client import APCUPSDConnectionError
from apcupsd_exporter.collector.catalogue import CATALOGUE, InvalidMeasurement, Measurement
from apcupsd_exporter.exporter import DEFAULT_TIMEOUT, Exporter
from tests.fakes import FixedStatusSource


def test_describe_does_not_dial():
    factory = MagicMock()
    exporter = Exporter(factory)

    assert tuple(exporter.describe()) == CATALOGUE
    factory.assert_not_called()


def test_collect_dials_with_timeout_and_closes(fixed_source):
    factory = MagicMock(return_value=fixed_source)
    exporter = Exporter(factory, timeout=2.0)

    result = exporter.collect()

    factory.assert_called_once_with(2.0)
    assert fixed_source.closed is True
    assert all(isinstance(m, Measurement) for m in result)


def test_each_scrape_dials_a_new_client(full_snapshot):
    clients = []

    def factory(timeout):
        client = FixedStatusSource(full_snapshot)
        clients.append(client)
        return client

    exporter = Exporter(factory)
    first = exporter.collect()
    second = exporter.collect()

    assert len(clients) == 2
    assert all(c.closed for c in clients)
    assert first == second


def test_factory_failure_yields_invalid_measurement():
    error = APCUPSDConnectionError("dial tcp :3551: connection refused")
    exporter = Exporter(MagicMock(side_effect=error))

    result = exporter.collect()

    assert len(result) == 1
    assert isinstance(result[0], InvalidMeasurement)
    assert result[0].error is error
    assert result[0].definition is CATALOGUE[0]


def test_provider_failure_still_closes_client(failing_source):
    exporter = Exporter(lambda timeout: failing_source)

    result = exporter.collect()

    assert [type(r) for r in result] == [InvalidMeasurement]
    assert failing_source.closed is True


def test_default_timeout():
    assert Exporter(MagicMock()).timeout == DEFAULT_TIMEOUT == 5.0


def test_close_failure_keeps_measurements(fixed_source):
    fixed_source.close = MagicMock(side_effect=OSError("close failed"))
    exporter = Exporter(lambda timeout: fixed_source)

    result = exporter.collect()

    fixed_source.close.assert_called_once_with()
    assert result
    assert all(isinstance(m, Measurement) for m in result)


def test_close_failure_keeps_invalid_measurement(failing_source):
    failing_source.close = MagicMock(side_effect=RuntimeError("close failed"))
    exporter = Exporter(lambda timeout: failing_source)

    result = exporter.collect()

    assert [type(r) for r in result] == [InvalidMeasurement]
    assert result[0].error is failing_source.error
