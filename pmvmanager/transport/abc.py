"""
Abstract transport interface for PMV communication.

A transport performs exactly one request/response exchange per call:
send a packet to a device endpoint and wait, for a bounded time, for the
single datagram that answers it.

Transports hold no per-device state between calls. Implementations must
release every resource acquired for a call before returning or raising.

Implementations:
- UdpTransport: one ephemeral UDP socket per call
- MockTransport / ScriptedMockTransport: in-memory, for tests
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractTransport(ABC):
    """
    Abstract base class for PMV transports.

    Example:
        >>> transport = UdpTransport()
        >>> reply = transport.send(packet, "10.0.0.21", 10, timeout=2.0)
    """

    @abstractmethod
    def send(self, data: bytes, host: str, port: int, timeout: float) -> bytes:
        """
        Send one packet and wait for its reply.

        Args:
            data: Complete packet bytes.
            host: Device IP address or host name.
            port: Device UDP port.
            timeout: Seconds to wait for the reply.

        Returns:
            Raw reply bytes, unmodified.

        Raises:
            TimeoutError: If no reply arrives within `timeout`.
            NetworkError: If the device cannot be reached.
        """
        ...
