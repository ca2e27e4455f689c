"""
Metric catalogue and collectors for apcupsd status.
"""

from apcupsd_exporter.collector.catalogue import (
    CATALOGUE,
    STATUS_KEYWORDS,
    InvalidMeasurement,
    Measurement,
    MetricDefinition,
    MetricKind,
    definitions,
)
from apcupsd_exporter.collector.ups import UPSCollector

__all__ = [
    "CATALOGUE",
    "STATUS_KEYWORDS",
    "InvalidMeasurement",
    "Measurement",
    "MetricDefinition",
    "MetricKind",
    "UPSCollector",
    "definitions",
]
