"""
Collector that turns one apcupsd status snapshot into metric values.

A collection cycle reads exactly one snapshot from the bound StatusSource.
On success every metric in the catalogue is derived from it, in catalogue
order; event timestamps apcupsd has not recorded are left out entirely.
On failure the cycle yields a single InvalidMeasurement and nothing else.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..apcupsd.client import StatusSource
from ..apcupsd.models import StatusSnapshot
from . import catalogue
from .catalogue import (
    FALLBACK_DEFINITION,
    STATUS_KEYWORDS,
    InvalidMeasurement,
    Measurement,
    MetricDefinition,
    epoch_seconds,
)

logger = logging.getLogger(__name__)

CollectResult = Union[List[Measurement], List[InvalidMeasurement]]

# Always emitted: readings, counters and durations.
_VALUES: Dict[MetricDefinition, Callable[[StatusSnapshot], Union[float, int, timedelta]]] = {
    catalogue.UPS_LOAD_PERCENT: lambda s: s.load_percent,
    catalogue.BATTERY_CHARGE_PERCENT: lambda s: s.battery_charge_percent,
    catalogue.LINE_VOLTS: lambda s: s.line_volts,
    catalogue.LINE_NOMINAL_VOLTS: lambda s: s.line_nominal_volts,
    catalogue.OUTPUT_VOLTS: lambda s: s.output_volts,
    catalogue.OUTPUT_AMPS: lambda s: s.output_amps,
    catalogue.BATTERY_VOLTS: lambda s: s.battery_volts,
    catalogue.BATTERY_NOMINAL_VOLTS: lambda s: s.battery_nominal_volts,
    catalogue.INTERNAL_TEMPERATURE_CELSIUS: lambda s: s.internal_temp_celsius,
    catalogue.BATTERY_NUMBER_TRANSFERS_TOTAL: lambda s: s.number_transfers,
    catalogue.BATTERY_TIME_LEFT_SECONDS: lambda s: s.time_left,
    catalogue.BATTERY_TIME_ON_SECONDS: lambda s: s.time_on_battery,
    catalogue.BATTERY_CUMULATIVE_TIME_ON_SECONDS_TOTAL: lambda s: s.cumulative_time_on_battery,
    catalogue.NOMINAL_POWER_WATTS: lambda s: s.nominal_power_watts,
}

# Emitted only when apcupsd has recorded the event.
_TIMESTAMPS: Dict[MetricDefinition, Callable[[StatusSnapshot], Optional[datetime]]] = {
    catalogue.LAST_TRANSFER_ON_BATTERY: lambda s: s.last_transfer_on_battery,
    catalogue.LAST_TRANSFER_OFF_BATTERY: lambda s: s.last_transfer_off_battery,
    catalogue.LAST_SELFTEST: lambda s: s.last_selftest,
}


def _as_float(value: Union[float, int, timedelta]) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def status_flags(status: str) -> List[Tuple[str, float]]:
    """
    Fan a STATUS string out into one (keyword, 0/1) pair per known keyword.

    Matching is by case-sensitive substring, so "SLAVEDOWN" sets both SLAVE
    and SLAVEDOWN. Words outside STATUS_KEYWORDS are ignored.
    """
    return [(keyword, 1.0 if keyword in status else 0.0) for keyword in STATUS_KEYWORDS]


def derive(snapshot: StatusSnapshot) -> List[Measurement]:
    """Derive every measurement for a snapshot, in catalogue order."""
    ups = (snapshot.ups_name,)
    measurements: List[Measurement] = []

    for definition in catalogue.definitions():
        if definition in _VALUES:
            value = _as_float(_VALUES[definition](snapshot))
            measurements.append(Measurement(definition, ups, value))
        elif definition in _TIMESTAMPS:
            when = _TIMESTAMPS[definition](snapshot)
            if when is None:
                continue
            measurements.append(Measurement(definition, ups, epoch_seconds(when)))
        elif definition is catalogue.UPS_STATUS:
            for keyword, value in status_flags(snapshot.status):
                measurements.append(Measurement(definition, ups + (keyword,), value))
        elif definition is catalogue.UPS_INFO:
            labels = (snapshot.ups_name, snapshot.hostname, snapshot.model, snapshot.status)
            measurements.append(Measurement(definition, labels, 1.0))
        else:
            raise KeyError(f"No derivation rule for {definition.name}")

    return measurements


def invalid(error: BaseException) -> List[InvalidMeasurement]:
    return [InvalidMeasurement(FALLBACK_DEFINITION, error)]


class UPSCollector:
    """
    Collects metrics for an APC UPS from a StatusSource.

    The source is borrowed: the collector never opens or closes it.
    """

    def __init__(self, source: StatusSource):
        self.source = source

    def describe(self) -> Sequence[MetricDefinition]:
        return catalogue.definitions()

    def collect(self) -> CollectResult:
        try:
            snapshot = self.source.status()
        except Exception as e:
            logger.error("Failed collecting UPS metric %s: %s", FALLBACK_DEFINITION.name, e)
            return invalid(e)

        measurements = derive(snapshot)
        logger.debug("Collected %d series for UPS '%s'", len(measurements), snapshot.ups_name)
        return measurements
