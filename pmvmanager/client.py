"""
PMV device client.

This module provides the main client interface for controlling one PMV
sign over UDP.

Every call is a single, self-contained exchange:
    command -> package() -> transport.send() -> decode_response() -> result

The client holds no connection and no mutable state, so one instance can be
shared between threads. There is no retry: a timeout or network failure is
raised to the caller, who decides what to do next.

Example:
    >>> from pmvmanager import PmvClient, Mode, Style
    >>>
    >>> client = PmvClient(0x05, "10.0.0.21")
    >>> client.switch_to_mode(Mode.FORCE)
    True
    >>> client.init_page(message_index=7, durations=(255, 0, 0, 0, 0))
    True
    >>> client.write_message("ROAD WORKS", row_index=0, message_index=7, page_index=0)
    True
    >>> client.get_rows_number()
    3
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from pmvmanager.models.commands import (
    GetMessageCommand,
    GetModeCommand,
    GetRowsNumberCommand,
    InitPageCommand,
    SwitchToModeCommand,
    TestCommand,
    WriteMessageCommand,
)
from pmvmanager.protocol.constants import Mode, ProtocolConstants, Style
from pmvmanager.protocol.decoder import Reply, decode_response
from pmvmanager.protocol.encoding import check_address
from pmvmanager.protocol.packet import encode_packet
from pmvmanager.transport.udp import UdpTransport

if TYPE_CHECKING:
    from pmvmanager.models.commands import BaseCommand
    from pmvmanager.models.records import MessageReadback
    from pmvmanager.transport.abc import AbstractTransport

# Module logger
logger = logging.getLogger(__name__)

_DEFAULT_DURATIONS = (ProtocolConstants.PAGE_DURATION_NOT_SET, 0, 0, 0, 0)


class PmvClient:
    """
    Client for one PMV device.

    Attributes:
        address: Device address (0-255).
        host: Device IP address or host name.
        port: Device UDP port.
        timeout: Reply timeout in seconds.
        transport: The underlying transport.
    """

    def __init__(
        self,
        address: int,
        host: str,
        port: int = ProtocolConstants.DEFAULT_PORT,
        timeout: float = ProtocolConstants.DEFAULT_RESPONSE_TIMEOUT,
        transport: AbstractTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            address: Device address (0-255).
            host: Device IP address or host name.
            port: Device UDP port (default: 10).
            timeout: Reply timeout in seconds (default: 2.0).
            transport: Transport to use (default: a new UdpTransport).

        Raises:
            InvalidAddressError: If address does not fit in one octet.
            ValueError: If host, port or timeout is invalid.
        """
        if not isinstance(host, str) or not host:
            raise ValueError(f"Host must be a non-empty string, got {host!r}")
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port <= 0xFFFF:
            raise ValueError(f"Port must be 1-65535, got {port!r}")
        if (
            isinstance(timeout, bool)
            or not isinstance(timeout, (int, float))
            or not math.isfinite(timeout)
            or timeout <= 0
        ):
            raise ValueError(f"Timeout must be a positive finite number, got {timeout!r}")

        self._address = check_address(address)
        self._host = host
        self._port = port
        self._timeout = float(timeout)
        self._transport = transport if transport is not None else UdpTransport()

    @property
    def address(self) -> int:
        """Get the device address."""
        return self._address

    @property
    def host(self) -> str:
        """Get the device host."""
        return self._host

    @property
    def port(self) -> int:
        """Get the device UDP port."""
        return self._port

    @property
    def timeout(self) -> float:
        """Get the reply timeout in seconds."""
        return self._timeout

    @property
    def transport(self) -> AbstractTransport:
        """Get the underlying transport."""
        return self._transport

    def package(self, command: BaseCommand) -> bytes:
        """
        Frame a command for this device.

        Raises:
            PacketSizeError: If the packet exceeds 128 octets.
        """
        return encode_packet(self._address, command.encode())

    def send(self, command: BaseCommand) -> Reply:
        """
        Send a command and decode the reply.

        Args:
            command: Any PMV command.

        Returns:
            Decoded reply: bool for write commands, Mode, int or
            MessageReadback for read commands.

        Raises:
            PacketSizeError: If the packet exceeds 128 octets.
            TimeoutError: If the device does not reply in time.
            NetworkError: If the device cannot be reached.
            ProtocolError: If the reply does not fit the command.
        """
        packet = self.package(command)
        logger.debug(
            "Sending %s to 0x%02X at %s:%d", command.operation, self._address, self._host, self._port
        )
        raw = self._transport.send(packet, self._host, self._port, self._timeout)
        return decode_response(command, raw)

    # ===== Write commands =====

    def test(self) -> bool:
        """Check the device is alive. True on ACK, False on NAK."""
        return self.send(TestCommand())

    def switch_to_mode(self, mode: Mode | str) -> bool:
        """Switch the device operating mode. True on ACK, False on NAK."""
        return self.send(SwitchToModeCommand(mode=mode))

    def init_page(
        self,
        message_index: int,
        durations: Sequence[int] = _DEFAULT_DURATIONS,
    ) -> bool:
        """
        Set up paging for one message. True on ACK, False on NAK.

        Args:
            message_index: Message index (0-7).
            durations: Five page durations, each 0-180 seconds or 255.
        """
        return self.send(InitPageCommand(message_index=message_index, durations=durations))

    def write_message(
        self,
        text: str,
        row_index: int,
        message_index: int,
        page_index: int,
        style: Style | str = Style.NORMAL,
    ) -> bool:
        """
        Write one row of a message page. True on ACK, False on NAK.

        Args:
            text: Row text (Latin-1, no carriage return).
            row_index: Row index (0-9).
            message_index: Message index (0-7).
            page_index: Page index (0-4).
            style: Text style.
        """
        return self.send(
            WriteMessageCommand(
                text=text,
                row_index=row_index,
                message_index=message_index,
                page_index=page_index,
                style=style,
            )
        )

    # ===== Read commands =====

    def get_mode(self) -> Mode:
        """Read the device operating mode."""
        return self.send(GetModeCommand())

    def get_rows_number(self) -> int:
        """Read the number of display rows."""
        return self.send(GetRowsNumberCommand())

    def get_message(
        self,
        row_index: int,
        message_index: int,
        page_index: int,
    ) -> MessageReadback:
        """
        Read back one row of a message page.

        Args:
            row_index: Row index (0-9).
            message_index: Message index (0-8).
            page_index: Page index (0-4).
        """
        return self.send(
            GetMessageCommand(
                row_index=row_index,
                message_index=message_index,
                page_index=page_index,
            )
        )

    def __repr__(self) -> str:
        return f"PmvClient(address=0x{self._address:02X}, endpoint={self._host}:{self._port})"
