"""
PMV device simulator.

Emulates a single PMV sign for testing without hardware. The simulator
keeps its own state, so write commands affect later read commands:

- WB changes the mode reported by RB
- WI stores row text that RI reads back
- WF stores page durations (see `pages`)

Requests are parsed with the real packet codec, and replies are framed
the way a device frames them:

    [STX][ADDR][OP][PAYLOAD ...][ETX][CS]

Packets for another address are ignored (the caller sees a timeout), and
malformed or unknown requests are answered with NAK.

Example:
    >>> sim = PmvSimulator(address=0x05, rows=3)
    >>> client = PmvClient(0x05, "sim", transport=sim)
    >>> client.write_message("SLOW DOWN", row_index=0, message_index=1, page_index=0)
    True
    >>> client.get_message(row_index=0, message_index=1, page_index=0).text
    'SLOW DOWN'
"""

from __future__ import annotations

import logging

from pmvmanager.exceptions import ProtocolError, TimeoutError
from pmvmanager.protocol.checksums import append_checksum
from pmvmanager.protocol.constants import (
    MODE_CODES,
    MODES,
    STYLE_CODES,
    STYLES,
    Mode,
    ProtocolConstants,
    Style,
)
from pmvmanager.protocol.packet import parse_packet
from pmvmanager.transport.abc import AbstractTransport

logger = logging.getLogger(__name__)


def build_reply(address: int, body: bytes) -> bytes:
    """
    Frame a structured device reply.

    Args:
        address: Replying device address.
        body: Operation code and payload.

    Returns:
        STX + address + body + ETX + checksum.
    """
    frame = (
        bytes([ProtocolConstants.STX, address])
        + body
        + bytes([ProtocolConstants.ETX])
    )
    return append_checksum(frame)


class PmvSimulator(AbstractTransport):
    """
    Simulated PMV device.

    Usable directly as a transport, or as a MockTransport response
    callback through `handle`.

    Attributes:
        address: Device address the simulator answers to.
        mode: Current operating mode.
        rows: Number of display rows reported by RC.
        messages: Stored row text, keyed by (row, message, page).
        pages: Page durations, keyed by message index.
    """

    def __init__(
        self,
        address: int = 0,
        rows: int = 3,
        mode: Mode = Mode.AUTOMATIC,
    ) -> None:
        self.address = address
        self.rows = rows
        self.mode = mode
        self.messages: dict[tuple[int, int, int], tuple[Style, str]] = {}
        self.pages: dict[int, tuple[int, ...]] = {}
        self.requests: list[bytes] = []

    def send(self, data: bytes, host: str, port: int, timeout: float) -> bytes:
        """
        Answer a packet as the device would.

        Raises:
            TimeoutError: If the device ignores the packet.
        """
        reply = self.handle(data)
        if reply is None:
            raise TimeoutError(f"No reply from {host}:{port}", timeout_seconds=timeout)
        return reply

    def handle(self, data: bytes) -> bytes | None:
        """
        Process one request packet.

        Returns:
            Reply bytes, or None if the packet is not for this device.
        """
        self.requests.append(bytes(data))

        try:
            packet = parse_packet(data)
        except ProtocolError as e:
            logger.debug("Simulator rejected packet: %s", e)
            return ProtocolConstants.NAK

        if packet.address != self.address:
            logger.debug("Simulator ignoring packet for address 0x%02X", packet.address)
            return None

        body = packet.control_field
        operation, params = body[:2], body[2:]
        handler = self._handlers.get(operation)
        if handler is None:
            logger.debug("Simulator unknown operation %r", operation)
            return ProtocolConstants.NAK

        try:
            return handler(self, params)
        except (ValueError, KeyError, IndexError) as e:
            logger.debug("Simulator malformed %r request: %s", operation, e)
            return ProtocolConstants.NAK

    # ===== Operation handlers =====

    def _test(self, params: bytes) -> bytes:
        if params:
            raise ValueError("unexpected parameters")
        return ProtocolConstants.ACK

    def _switch_mode(self, params: bytes) -> bytes:
        self.mode = MODE_CODES[params.decode("ascii")]
        return ProtocolConstants.ACK

    def _init_page(self, params: bytes) -> bytes:
        text = params.decode("ascii")
        if len(text) != 2 + 3 * ProtocolConstants.PAGES_PER_MESSAGE:
            raise ValueError(f"bad length {len(text)}")
        message = int(text[:2])
        self.pages[message] = tuple(int(text[i:i + 3]) for i in range(2, len(text), 3))
        return ProtocolConstants.ACK

    def _write_message(self, params: bytes) -> bytes:
        if len(params) < 8 or params[-1] != ProtocolConstants.CR:
            raise ValueError("missing terminator")
        key = self._message_key(params[:6])
        style = STYLE_CODES[chr(params[6])]
        self.messages[key] = (style, params[7:-1].decode("latin-1"))
        return ProtocolConstants.ACK

    def _get_mode(self, params: bytes) -> bytes:
        return build_reply(self.address, b"RB" + MODES[self.mode].encode("ascii"))

    def _get_rows_number(self, params: bytes) -> bytes:
        return build_reply(self.address, b"RC" + f"{self.rows:02d}".encode("ascii"))

    def _get_message(self, params: bytes) -> bytes:
        if len(params) != 6:
            raise ValueError(f"bad length {len(params)}")
        style, text = self.messages.get(self._message_key(params), (Style.NORMAL, ""))
        body = (
            b"RI"
            + STYLES[style].encode("ascii")
            + text.encode("latin-1")
            + bytes([ProtocolConstants.CR])
        )
        return build_reply(self.address, body)

    @staticmethod
    def _message_key(params: bytes) -> tuple[int, int, int]:
        text = params.decode("ascii")
        return int(text[0:2]), int(text[2:4]), int(text[4:6])

    _handlers = {
        b"WT": _test,
        b"WB": _switch_mode,
        b"WF": _init_page,
        b"WI": _write_message,
        b"RB": _get_mode,
        b"RC": _get_rows_number,
        b"RI": _get_message,
    }

    def __repr__(self) -> str:
        return f"PmvSimulator(address=0x{self.address:02X}, mode={self.mode.value})"
