"""
apcupsd Network Information Server (NIS) client.

This module provides a client for reading UPS status from apcupsd. The
client sends the NIS status command and reads length-prefixed records
until the zero-length terminator; the apcaccess library parses the
resulting text. Each call to status() opens and closes its own
connection, and the whole request is bounded by the client's timeout.
"""

import logging
import socket
import time
from typing import Callable, Protocol

from apcaccess import status as apc
from pydantic import ValidationError

from .models import StatusSnapshot

logger = logging.getLogger(__name__)

CMD_STATUS = b"\x00\x06status"


class APCUPSDError(Exception):
    """Base exception for apcupsd client errors."""
    pass


class APCUPSDConnectionError(APCUPSDError):
    """Exception for apcupsd connection errors."""
    pass


class APCUPSDTimeoutError(APCUPSDError):
    """Exception raised when apcupsd does not answer within the timeout."""
    pass


class APCUPSDProtocolError(APCUPSDError):
    """Exception for malformed or unparseable status responses."""
    pass


class StatusSource(Protocol):
    """Anything that can produce a StatusSnapshot."""

    def status(self) -> StatusSnapshot:
        ...


ClientFactory = Callable[[float], StatusSource]


def _recv_exact(sock: socket.socket, size: int, deadline: float) -> bytes:
    """Read exactly size bytes, raising socket.timeout once the deadline passes."""
    data = bytearray()
    while len(data) < size:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise socket.timeout("deadline exceeded")
        sock.settimeout(remaining)
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise APCUPSDProtocolError("connection closed before end of status")
        data += chunk
    return bytes(data)


class APCUPSDClient:
    """
    A client for the apcupsd NIS.
    """

    def __init__(self, host: str = "localhost", port: int = 3551, timeout: float = 5.0):
        """
        Initialize the apcupsd client.

        Args:
            host: The apcupsd NIS hostname or IP address (IPv4 or IPv6).
            port: The apcupsd NIS port.
            timeout: Upper bound in seconds for a whole status request,
                connect included.
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        logger.debug("Initialized apcupsd client host=%s port=%s timeout=%s", host, port, timeout)

    def _read_status(self) -> str:
        """Send the status command and return the raw NIS response text."""
        deadline = time.monotonic() + self.timeout
        with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
            sock.sendall(CMD_STATUS)
            buf = bytearray()
            while True:
                header = _recv_exact(sock, 2, deadline)
                buf += header
                length = int.from_bytes(header, "big")
                if length == 0:
                    # Length bytes can be >= 0x80, keep them as single characters
                    return buf.decode("utf-8", errors="surrogateescape")
                buf += _recv_exact(sock, length, deadline)

    def status(self) -> StatusSnapshot:
        """
        Fetch and parse the current UPS status.

        Returns:
            A StatusSnapshot for the UPS served by this NIS.

        Raises:
            APCUPSDTimeoutError: If the server does not answer in time.
            APCUPSDConnectionError: If the server cannot be reached.
            APCUPSDProtocolError: If the response is cut short or cannot be parsed.
        """
        try:
            logger.debug("Requesting status from %s:%s", self.host, self.port)
            raw = self._read_status()
        except socket.timeout as e:
            raise APCUPSDTimeoutError(
                f"Timed out after {self.timeout}s waiting for apcupsd at {self.host}:{self.port}"
            ) from e
        except APCUPSDProtocolError as e:
            raise APCUPSDProtocolError(f"Truncated status response from {self.host}:{self.port}: {e}") from e
        except OSError as e:
            raise APCUPSDConnectionError(f"Failed to read status from apcupsd at {self.host}:{self.port}") from e

        try:
            fields = apc.parse(raw)
        except (ValueError, IndexError) as e:
            raise APCUPSDProtocolError(f"Malformed status response from {self.host}:{self.port}") from e
        if not fields:
            raise APCUPSDProtocolError(f"Empty status response from {self.host}:{self.port}")

        try:
            snapshot = StatusSnapshot.model_validate(fields)
        except ValidationError as e:
            raise APCUPSDProtocolError(f"Invalid status values from {self.host}:{self.port}: {e}") from e

        logger.debug("apcupsd status ok for '%s' (%d fields)", snapshot.ups_name, len(fields))
        return snapshot

    def close(self) -> None:
        """Release the client. Every status() request closes its own socket."""
        logger.debug("Closed apcupsd client host=%s port=%s", self.host, self.port)


def dial(host: str, port: int) -> ClientFactory:
    """
    Return a ClientFactory that creates a fresh client per scrape.
    """
    def factory(timeout: float) -> APCUPSDClient:
        return APCUPSDClient(host=host, port=port, timeout=timeout)

    return factory
