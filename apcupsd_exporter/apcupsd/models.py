"""
Data models for apcupsd integration.

This module defines the Pydantic model for representing and validating
one status report read from an apcupsd Network Information Server.
"""

import re
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.timeparse import NOT_AVAILABLE, parse_duration, parse_timestamp

_UNIT_SUFFIX = re.compile(
    r"\s+(Percent Load Capacity|Percent|Volts|Amps|Watts|VA|Hz|C|F)$",
    re.IGNORECASE,
)


def _not_reported(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() in ("", NOT_AVAILABLE))


def _strip_units(value: str) -> str:
    return _UNIT_SUFFIX.sub("", value.strip())


class StatusSnapshot(BaseModel):
    """
    Represents one snapshot of UPS status.

    Values the device does not report are zero (numbers), empty (strings)
    or None (event timestamps, meaning the event never happened).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hostname: str = Field("", alias="HOSTNAME")
    ups_name: str = Field("", alias="UPSNAME")
    model: str = Field("", alias="MODEL")
    status: str = Field("", alias="STATUS")

    load_percent: float = Field(0.0, alias="LOADPCT")
    battery_charge_percent: float = Field(0.0, alias="BCHARGE")
    line_volts: float = Field(0.0, alias="LINEV")
    line_nominal_volts: float = Field(0.0, alias="NOMINV")
    output_volts: float = Field(0.0, alias="OUTPUTV")
    output_amps: float = Field(0.0, alias="OUTCURNT")
    battery_volts: float = Field(0.0, alias="BATTV")
    battery_nominal_volts: float = Field(0.0, alias="NOMBATTV")
    internal_temp_celsius: float = Field(0.0, alias="ITEMP")

    number_transfers: int = Field(0, alias="NUMXFERS")
    cumulative_time_on_battery: timedelta = Field(timedelta(0), alias="CUMONBATT")
    time_left: timedelta = Field(timedelta(0), alias="TIMELEFT")
    time_on_battery: timedelta = Field(timedelta(0), alias="TONBATT")

    last_transfer_on_battery: datetime | None = Field(None, alias="XONBATT")
    last_transfer_off_battery: datetime | None = Field(None, alias="XOFFBATT")
    last_selftest: datetime | None = Field(None, alias="LASTSTEST")

    nominal_power_watts: int = Field(0, alias="NOMPOWER")

    @field_validator("hostname", "ups_name", "model", "status", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator(
        "load_percent",
        "battery_charge_percent",
        "line_volts",
        "line_nominal_volts",
        "output_volts",
        "output_amps",
        "battery_volts",
        "battery_nominal_volts",
        "internal_temp_celsius",
        mode="before",
    )
    @classmethod
    def _reading(cls, v: Any) -> Any:
        if _not_reported(v):
            return 0.0
        if isinstance(v, str):
            return float(_strip_units(v))
        return v

    @field_validator("number_transfers", "nominal_power_watts", mode="before")
    @classmethod
    def _whole_number(cls, v: Any) -> Any:
        if _not_reported(v):
            return 0
        if isinstance(v, str):
            # NOMPOWER is reported as "865 Watts"
            return int(float(_strip_units(v)))
        return v

    @field_validator("cumulative_time_on_battery", "time_left", "time_on_battery", mode="before")
    @classmethod
    def _duration(cls, v: Any) -> Any:
        if _not_reported(v):
            return timedelta(0)
        if isinstance(v, str):
            return parse_duration(v)
        return v

    @field_validator("last_transfer_on_battery", "last_transfer_off_battery", "last_selftest", mode="before")
    @classmethod
    def _timestamp(cls, v: Any) -> Any:
        if _not_reported(v):
            return None
        if isinstance(v, str):
            return parse_timestamp(v)
        return v
