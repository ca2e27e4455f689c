"""
The fixed catalogue of metrics exported for an apcupsd-managed UPS.

Every numeric series carries a single "ups" label with the UPS name.
Hostname and model live on the apcupsd_ups_info series only, so queries
join the two on "ups".
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Tuple

NAMESPACE = "apcupsd"

UPS_LABEL = "ups"
STATUS_LABEL = "status"
INFO_LABELS = (UPS_LABEL, "hostname", "model", STATUS_LABEL)

# Matched as substrings of the STATUS field, in this order.
STATUS_KEYWORDS: Tuple[str, ...] = (
    "CAL",
    "TRIM",
    "BOOST",
    "ONLINE",
    "ONBATT",
    "OVERLOAD",
    "LOWBATT",
    "REPLACEBATT",
    "NOBATT",
    "SLAVE",
    "SLAVEDOWN",
    "COMMLOST",
    "SHUTTING DOWN",
)


class MetricKind(str, Enum):
    GAUGE = "gauge"
    COUNTER = "counter"


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    help: str
    labels: Tuple[str, ...] = (UPS_LABEL,)
    kind: MetricKind = MetricKind.GAUGE


@dataclass(frozen=True)
class Measurement:
    """A definition bound to label values and one value for a single scrape."""

    definition: MetricDefinition
    label_values: Tuple[str, ...]
    value: float


@dataclass(frozen=True)
class InvalidMeasurement:
    """Stands in for a whole scrape when no snapshot could be read."""

    definition: MetricDefinition
    error: BaseException


def fq_name(name: str) -> str:
    return f"{NAMESPACE}_{name}"


def epoch_seconds(t: datetime) -> float:
    return float(int(t.timestamp()))


UPS_LOAD_PERCENT = MetricDefinition(fq_name("ups_load_percent"), "Current UPS load percentage.")
BATTERY_CHARGE_PERCENT = MetricDefinition(fq_name("battery_charge_percent"), "Current UPS battery charge percentage.")
LINE_VOLTS = MetricDefinition(fq_name("line_volts"), "Current AC input line voltage.")
LINE_NOMINAL_VOLTS = MetricDefinition(fq_name("line_nominal_volts"), "Nominal AC input line voltage.")
OUTPUT_VOLTS = MetricDefinition(fq_name("output_volts"), "Current AC output voltage.")
OUTPUT_AMPS = MetricDefinition(fq_name("output_amps"), "Current AC output current in amperes.")
BATTERY_VOLTS = MetricDefinition(fq_name("battery_volts"), "Current UPS battery voltage.")
BATTERY_NOMINAL_VOLTS = MetricDefinition(fq_name("battery_nominal_volts"), "Nominal UPS battery voltage.")
INTERNAL_TEMPERATURE_CELSIUS = MetricDefinition(
    fq_name("internal_temperature_celsius"), "Internal UPS temperature in degrees Celsius."
)
BATTERY_NUMBER_TRANSFERS_TOTAL = MetricDefinition(
    fq_name("battery_number_transfers_total"),
    "Total number of transfers to UPS battery power.",
    kind=MetricKind.COUNTER,
)
BATTERY_TIME_LEFT_SECONDS = MetricDefinition(
    fq_name("battery_time_left_seconds"), "Number of seconds remaining of UPS battery power."
)
BATTERY_TIME_ON_SECONDS = MetricDefinition(
    fq_name("battery_time_on_seconds"),
    "Number of seconds the UPS has been providing battery power due to an AC input line outage.",
)
BATTERY_CUMULATIVE_TIME_ON_SECONDS_TOTAL = MetricDefinition(
    fq_name("battery_cumulative_time_on_seconds_total"),
    "Total number of seconds the UPS has provided battery power due to AC input line outages.",
    kind=MetricKind.COUNTER,
)
LAST_TRANSFER_ON_BATTERY = MetricDefinition(
    fq_name("last_transfer_on_battery"),
    "Time of last transfer to battery since apcupsd startup, in Unix seconds.",
)
LAST_TRANSFER_OFF_BATTERY = MetricDefinition(
    fq_name("last_transfer_off_battery"),
    "Time of last transfer from battery since apcupsd startup, in Unix seconds.",
)
LAST_SELFTEST = MetricDefinition(
    fq_name("last_selftest"),
    "Time of last selftest since apcupsd startup, in Unix seconds.",
)
NOMINAL_POWER_WATTS = MetricDefinition(fq_name("nominal_power_watts"), "Nominal power output in watts.")
UPS_STATUS = MetricDefinition(
    fq_name("ups_status"),
    "UPS status flags, 1 when the flag is part of the current status.",
    labels=(UPS_LABEL, STATUS_LABEL),
)
UPS_INFO = MetricDefinition(fq_name("ups_info"), "Hostname, UPS model, name and status text.", labels=INFO_LABELS)


CATALOGUE: Tuple[MetricDefinition, ...] = (
    UPS_LOAD_PERCENT,
    BATTERY_CHARGE_PERCENT,
    LINE_VOLTS,
    LINE_NOMINAL_VOLTS,
    OUTPUT_VOLTS,
    OUTPUT_AMPS,
    BATTERY_VOLTS,
    BATTERY_NOMINAL_VOLTS,
    INTERNAL_TEMPERATURE_CELSIUS,
    BATTERY_NUMBER_TRANSFERS_TOTAL,
    BATTERY_TIME_LEFT_SECONDS,
    BATTERY_TIME_ON_SECONDS,
    BATTERY_CUMULATIVE_TIME_ON_SECONDS_TOTAL,
    LAST_TRANSFER_ON_BATTERY,
    LAST_TRANSFER_OFF_BATTERY,
    LAST_SELFTEST,
    NOMINAL_POWER_WATTS,
    UPS_STATUS,
    UPS_INFO,
)

# Failed scrapes are reported against the first numeric definition.
FALLBACK_DEFINITION = CATALOGUE[0]


def definitions() -> Tuple[MetricDefinition, ...]:
    """Return every metric this exporter can emit, in emission order."""
    return CATALOGUE
