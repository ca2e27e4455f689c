import logging
from datetime import timedelta

import pytest
from click.testing import CliRunner

from apcupsd_exporter.apcupsd.client import APCUPSDConnectionError
from apcupsd_exporter.apcupsd.models import StatusSnapshot
from tests.fakes import FailingStatusSource, FixedStatusSource, unix


@pytest.fixture
def full_snapshot() -> StatusSnapshot:
    return StatusSnapshot(
        hostname="a",
        model="b",
        ups_name="c",
        status="ONLINE",
        battery_charge_percent=100.0,
        cumulative_time_on_battery=timedelta(seconds=30),
        battery_nominal_volts=12.0,
        time_left=timedelta(minutes=2),
        time_on_battery=timedelta(seconds=10),
        battery_volts=13.2,
        line_nominal_volts=120.0,
        line_volts=121.1,
        output_volts=120.5,
        output_amps=1.5,
        internal_temp_celsius=29.2,
        load_percent=16.0,
        number_transfers=1,
        last_transfer_on_battery=unix(100001),
        last_transfer_off_battery=unix(100002),
        last_selftest=unix(100003),
        nominal_power_watts=50,
    )


@pytest.fixture
def fixed_source(full_snapshot) -> FixedStatusSource:
    return FixedStatusSource(full_snapshot)


@pytest.fixture
def failing_source() -> FailingStatusSource:
    return FailingStatusSource(APCUPSDConnectionError("connection refused"))


@pytest.fixture
def nis_fields():
    """Key/value pairs as apcaccess parses them from a real apcupsd NIS."""
    return {
        "APC": "001,036,0879",
        "DATE": "2024-03-01 10:15:00 +0000",
        "HOSTNAME": "foo",
        "VERSION": "3.14.14 (31 May 2016) debian",
        "UPSNAME": "bar",
        "CABLE": "USB Cable",
        "DRIVER": "USB UPS Driver",
        "UPSMODE": "Stand Alone",
        "MODEL": "APC UPS",
        "STATUS": "ONLINE",
        "LINEV": "121.1 Volts",
        "LOADPCT": "16.0 Percent",
        "BCHARGE": "100.0 Percent",
        "TIMELEFT": "2.0 Minutes",
        "OUTPUTV": "120.5 Volts",
        "OUTCURNT": "1.50 Amps",
        "ITEMP": "29.2 C",
        "BATTV": "13.2 Volts",
        "NOMBATTV": "12.0 Volts",
        "NOMINV": "120 Volts",
        "NOMPOWER": "865 Watts",
        "NUMXFERS": "1",
        "XONBATT": "1970-01-02 03:46:41 +0000",
        "XOFFBATT": "N/A",
        "TONBATT": "10 Seconds",
        "CUMONBATT": "30 Seconds",
        "LASTSTEST": "1970-01-02 03:46:43 +0000",
        "END APC": "2024-03-01 10:15:01 +0000",
    }


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def root_logger():
    """Undo handlers and level set by setup_logging during a test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield root
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)
