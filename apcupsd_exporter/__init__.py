"""
apcupsd-exporter: Prometheus exporter for APC UPS devices managed by apcupsd.

Reads UPS status from an apcupsd Network Information Server on every scrape
and exposes it as a fixed catalogue of metrics.
"""

__version__ = "0.1.0"
