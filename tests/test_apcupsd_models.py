"""
Tests for the apcupsd status snapshot model.
"""

from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from apcupsd_exporter.apcupsd.models import StatusSnapshot
from apcupsd_exporter.utils.timeparse import parse_duration, parse_timestamp


def test_snapshot_from_nis_fields(nis_fields):
    """Test that units are stripped and durations and timestamps parsed."""
    s = StatusSnapshot.model_validate(nis_fields)

    assert s.hostname == "foo"
    assert s.ups_name == "bar"
    assert s.model == "APC UPS"
    assert s.status == "ONLINE"
    assert s.load_percent == 16.0
    assert s.battery_charge_percent == 100.0
    assert s.line_volts == 121.1
    assert s.line_nominal_volts == 120.0
    assert s.output_volts == 120.5
    assert s.output_amps == 1.5
    assert s.battery_volts == 13.2
    assert s.battery_nominal_volts == 12.0
    assert s.internal_temp_celsius == 29.2
    assert s.number_transfers == 1
    assert s.nominal_power_watts == 865
    assert s.time_left == timedelta(minutes=2)
    assert s.time_on_battery == timedelta(seconds=10)
    assert s.cumulative_time_on_battery == timedelta(seconds=30)
    assert s.last_transfer_on_battery.timestamp() == 100001
    assert s.last_selftest.timestamp() == 100003


def test_not_available_timestamp_is_absent(nis_fields):
    s = StatusSnapshot.model_validate(nis_fields)
    assert s.last_transfer_off_battery is None


def test_empty_snapshot_defaults():
    """Test that an empty snapshot reports zeros, empty strings and no timestamps."""
    s = StatusSnapshot()

    assert s.hostname == ""
    assert s.ups_name == ""
    assert s.model == ""
    assert s.status == ""
    assert s.load_percent == 0.0
    assert s.number_transfers == 0
    assert s.time_left == timedelta(0)
    assert s.last_transfer_on_battery is None
    assert s.last_transfer_off_battery is None
    assert s.last_selftest is None


def test_missing_fields_are_not_reported():
    """Test that devices reporting only a few keys still produce a full snapshot."""
    s = StatusSnapshot.model_validate({"UPSNAME": "ups1", "STATUS": "ONBATT ", "LINEV": ""})

    assert s.ups_name == "ups1"
    assert s.status == "ONBATT"
    assert s.line_volts == 0.0
    assert s.internal_temp_celsius == 0.0
    assert s.last_selftest is None


def test_unparseable_value_rejects_snapshot(nis_fields):
    nis_fields["BCHARGE"] = "lots Percent"
    with pytest.raises(ValidationError):
        StatusSnapshot.model_validate(nis_fields)


def test_snapshot_is_immutable(full_snapshot):
    with pytest.raises(ValidationError):
        full_snapshot.load_percent = 50.0


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2.0 Minutes", timedelta(minutes=2)),
        ("30 Seconds", timedelta(seconds=30)),
        ("1 Hours", timedelta(hours=1)),
        ("45", timedelta(seconds=45)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


def test_parse_duration_rejects_unknown_unit():
    with pytest.raises(ValueError, match="Invalid duration unit"):
        parse_duration("3 Fortnights")


def test_parse_timestamp_long_format():
    t = parse_timestamp("2016-09-06 22:13:28 -0400")
    assert t.utcoffset() == timedelta(hours=-4)
    assert t.hour == 22


def test_parse_timestamp_legacy_format_is_utc():
    t = parse_timestamp("Tue Sep 06 22:13:28 EDT 2016")
    assert t.tzinfo == timezone.utc
    assert (t.year, t.month, t.day, t.hour) == (2016, 9, 6, 22)


@pytest.mark.parametrize("value", ["", "N/A", "  "])
def test_parse_timestamp_absent(value):
    assert parse_timestamp(value) is None


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(ValueError, match="Invalid timestamp format"):
        parse_timestamp("yesterday")
