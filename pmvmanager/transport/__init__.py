"""
Transport layer for PMV communication.

Available transports:
- UdpTransport: one UDP socket per request/response exchange
- MockTransport: queued responses for testing without hardware
- ScriptedMockTransport: request/response script for testing
- PmvSimulator: stateful simulated device

Example:
    >>> from pmvmanager.transport import UdpTransport
    >>> reply = UdpTransport().send(packet, "10.0.0.21", 10, timeout=2.0)

Testing Example:
    >>> from pmvmanager.transport import MockTransport
    >>> mock = MockTransport()
    >>> mock.add_response(b"\\x06" * 5)  # ACK
"""

from pmvmanager.transport.abc import AbstractTransport
from pmvmanager.transport.mock import MockTransport, ScriptedMockTransport
from pmvmanager.transport.simulator import PmvSimulator, build_reply
from pmvmanager.transport.udp import UdpTransport

__all__ = [
    "AbstractTransport",
    "UdpTransport",
    "MockTransport",
    "ScriptedMockTransport",
    "PmvSimulator",
    "build_reply",
]
