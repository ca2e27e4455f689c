"""
Bridge from measurement sources to prometheus_client's collector protocol.
"""

from typing import Iterator, List, Protocol, Sequence

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from .catalogue import InvalidMeasurement, Measurement, MetricDefinition, MetricKind
from .ups import CollectResult


class CollectionError(Exception):
    """Raised during exposition when a scrape produced an invalid measurement."""

    def __init__(self, metric: str, error: BaseException):
        super().__init__(f"failed collecting metric {metric}: {error}")
        self.metric = metric
        self.error = error


class MeasurementSource(Protocol):
    def describe(self) -> Sequence[MetricDefinition]:
        ...

    def collect(self) -> CollectResult:
        ...


def family(definition: MetricDefinition) -> Metric:
    if definition.kind is MetricKind.COUNTER:
        return CounterMetricFamily(definition.name, definition.help, labels=list(definition.labels))
    return GaugeMetricFamily(definition.name, definition.help, labels=list(definition.labels))


class PrometheusCollector(Collector):
    """
    Registers a measurement source with a prometheus_client registry.
    """

    def __init__(self, source: MeasurementSource):
        self.source = source

    def describe(self) -> Iterator[Metric]:
        for definition in self.source.describe():
            yield family(definition)

    def collect(self) -> Iterator[Metric]:
        result = self.source.collect()
        for item in result:
            if isinstance(item, InvalidMeasurement):
                raise CollectionError(item.definition.name, item.error)

        by_definition = {}
        for m in result:
            by_definition.setdefault(m.definition, []).append(m)

        for definition in self.source.describe():
            samples: List[Measurement] = by_definition.get(definition, [])
            if not samples:
                continue
            metric = family(definition)
            for m in samples:
                metric.add_metric(list(m.label_values), m.value)
            yield metric
