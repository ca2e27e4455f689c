"""
apcupsd Network Information Server integration.

Provides the status client and the snapshot model it produces.
"""

from apcupsd_exporter.apcupsd.client import (
    APCUPSDClient,
    APCUPSDConnectionError,
    APCUPSDError,
    APCUPSDProtocolError,
    APCUPSDTimeoutError,
    ClientFactory,
    StatusSource,
    dial,
)
from apcupsd_exporter.apcupsd.models import StatusSnapshot

__all__ = [
    "APCUPSDClient",
    "APCUPSDConnectionError",
    "APCUPSDError",
    "APCUPSDProtocolError",
    "APCUPSDTimeoutError",
    "ClientFactory",
    "StatusSource",
    "StatusSnapshot",
    "dial",
]
