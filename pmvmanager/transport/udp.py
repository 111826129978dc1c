"""
UDP transport for PMV devices.

Each call opens its own UDP socket, connects it to the device endpoint,
sends the packet and waits for one reply datagram of at most 128 octets;
longer replies are rejected rather than truncated.
The socket is closed on every exit path, including timeouts and network
failures.

Connecting the socket restricts the reply to datagrams coming from the
device endpoint, and lets ICMP "port unreachable" surface as an error on
receive instead of a silent timeout.

Example:
    >>> transport = UdpTransport()
    >>> reply = transport.send(packet, "10.0.0.21", 10, timeout=2.0)
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable

from pmvmanager.exceptions import NetworkError, ProtocolError, TimeoutError
from pmvmanager.protocol.constants import ProtocolConstants
from pmvmanager.transport.abc import AbstractTransport

logger = logging.getLogger(__name__)


class UdpTransport(AbstractTransport):
    """
    One-shot UDP request/response transport.

    The transport keeps no socket between calls, so a single instance may
    be shared by any number of threads.

    Attributes:
        max_reply_size: Largest reply datagram accepted, in octets.
    """

    def __init__(
        self,
        socket_factory: Callable[..., socket.socket] = socket.socket,
        max_reply_size: int = ProtocolConstants.MAX_PACKET_SIZE,
    ) -> None:
        """
        Initialize the UDP transport.

        Args:
            socket_factory: Callable creating sockets, with the signature of
                socket.socket.
            max_reply_size: Largest reply datagram accepted, in octets.
        """
        self._socket_factory = socket_factory
        self._max_reply_size = max_reply_size

    @property
    def max_reply_size(self) -> int:
        """Get the largest accepted reply size."""
        return self._max_reply_size

    def send(self, data: bytes, host: str, port: int, timeout: float) -> bytes:
        """
        Send one packet over UDP and wait for the reply.

        Args:
            data: Complete packet bytes.
            host: Device IP address or host name.
            port: Device UDP port.
            timeout: Seconds to wait for the reply.

        Returns:
            Raw reply datagram.

        Raises:
            TimeoutError: If no reply arrives within `timeout`.
            NetworkError: If the endpoint cannot be resolved or reached.
            ProtocolError: If the reply is longer than `max_reply_size`.
        """
        family, address = self._resolve(host, port)

        logger.debug("UDP send to %s:%d: %s", host, port, data.hex(" "))
        try:
            with self._socket_factory(family, socket.SOCK_DGRAM) as sock:
                sock.settimeout(timeout)
                sock.connect(address)
                sock.send(data)
                # One spare octet makes an oversized reply detectable
                reply = sock.recv(self._max_reply_size + 1)

        except socket.timeout:
            raise TimeoutError(
                f"No reply from {host}:{port}",
                timeout_seconds=timeout,
            ) from None
        except OSError as e:
            raise NetworkError(f"UDP exchange failed: {e}", host=host, port=port) from e

        logger.debug("UDP reply from %s:%d: %s", host, port, reply.hex(" "))
        if len(reply) > self._max_reply_size:
            raise ProtocolError(
                f"Reply exceeds {self._max_reply_size} octets",
                raw=reply,
            )
        return reply

    def _resolve(self, host: str, port: int) -> tuple[int, tuple]:
        """Resolve the endpoint to an address family and socket address."""
        try:
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)
        except (OSError, UnicodeError) as e:
            raise NetworkError(f"Cannot resolve host: {e}", host=host, port=port) from e

        family, _, _, _, address = infos[0]
        return family, address

    def __repr__(self) -> str:
        return f"UdpTransport(max_reply_size={self._max_reply_size})"
