"""
Per-scrape composition of the apcupsd client and the UPS collector.

An Exporter dials a fresh client on every collect() so connections are
short-lived and less likely to time out or go stale between scrapes.
Concurrent scrapes each get their own client; nothing is cached.
"""

import logging
from typing import Sequence

from .apcupsd.client import ClientFactory
from .collector import catalogue
from .collector.catalogue import MetricDefinition
from .collector.prometheus import PrometheusCollector
from .collector.ups import CollectResult, UPSCollector, invalid

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class Exporter:
    """
    A Prometheus exporter for apcupsd metrics.
    """

    def __init__(self, client_factory: ClientFactory, timeout: float = DEFAULT_TIMEOUT):
        """
        Args:
            client_factory: Called with the timeout on every scrape to
                obtain a StatusSource.
            timeout: Upper bound in seconds for one status request.
        """
        self.client_factory = client_factory
        self.timeout = timeout

    def describe(self) -> Sequence[MetricDefinition]:
        return catalogue.definitions()

    def collect(self) -> CollectResult:
        try:
            client = self.client_factory(self.timeout)
        except Exception as e:
            logger.error("Error creating apcupsd client: %s", e)
            return invalid(e)

        try:
            return UPSCollector(client).collect()
        finally:
            close = getattr(client, "close", None)
            if close is not None:
                try:
                    close()
                except Exception as e:
                    logger.error("Error closing apcupsd client: %s", e)

    def prometheus_collector(self) -> PrometheusCollector:
        return PrometheusCollector(self)
