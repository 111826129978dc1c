"""
PMV packet framing.

Every request sent to a device is a single UDP datagram:

    [STX][ADDR][CONTROL FIELD ...][ETX][CS]

- STX: 0x02
- ADDR: device address, one raw byte
- CONTROL FIELD: ASCII operation code and parameters (see models.commands)
- ETX: 0x03
- CS: XOR of every preceding byte, STX through ETX

A packet never exceeds 128 octets; longer packets are rejected, not
truncated.

Replies are not parsed here: their layout depends on the command that was
sent and is handled by protocol.decoder.
"""

from __future__ import annotations

from dataclasses import dataclass

from pmvmanager.exceptions import ChecksumError, FrameError, PacketSizeError
from pmvmanager.protocol.checksums import calculate_checksum
from pmvmanager.protocol.constants import ProtocolConstants
from pmvmanager.protocol.encoding import encode_address

# STX + ADDR + ETX + CS
FRAME_OVERHEAD = 4


@dataclass(frozen=True)
class Packet:
    """
    A framed PMV request.

    Attributes:
        address: Device address (0-255).
        control_field: Control field bytes, without framing.
        checksum: Checksum byte value.
        raw: Complete packet bytes as transmitted.
    """

    address: int
    control_field: bytes
    checksum: int
    raw: bytes

    @property
    def operation(self) -> str:
        """Two-character operation code (e.g. "WT"), or "" if absent."""
        return self.control_field[:2].decode("ascii", errors="replace")

    def __bytes__(self) -> bytes:
        return self.raw

    def __len__(self) -> int:
        return len(self.raw)

    def __repr__(self) -> str:
        return f"Packet(address=0x{self.address:02X}, control_field={self.control_field!r})"


def _control_bytes(control_field: str | bytes) -> bytes:
    if isinstance(control_field, str):
        return control_field.encode("latin-1")
    return bytes(control_field)


def build_packet(address: int, control_field: str | bytes) -> Packet:
    """
    Frame a control field for one device.

    Args:
        address: Device address (0-255).
        control_field: Control field, as text or bytes.

    Returns:
        The framed Packet.

    Raises:
        InvalidAddressError: If address does not fit in one octet.
        PacketSizeError: If the framed packet exceeds 128 octets.
    """
    body = _control_bytes(control_field)
    frame = (
        bytes([ProtocolConstants.STX])
        + encode_address(address)
        + body
        + bytes([ProtocolConstants.ETX])
    )
    checksum = calculate_checksum(frame)
    raw = frame + bytes([checksum])

    if len(raw) > ProtocolConstants.MAX_PACKET_SIZE:
        raise PacketSizeError(len(raw), ProtocolConstants.MAX_PACKET_SIZE)

    return Packet(address=address, control_field=body, checksum=checksum, raw=raw)


def encode_packet(address: int, control_field: str | bytes) -> bytes:
    """
    Frame a control field and return the bytes to transmit.

    Example:
        >>> encode_packet(0x05, "WT").hex(" ")
        '02 05 57 54 03 07'
    """
    return build_packet(address, control_field).raw


def parse_packet(raw: bytes | bytearray | memoryview) -> Packet:
    """
    Parse a request packet back into its parts.

    Used on the device side (see transport.simulator) and for diagnostics.

    Args:
        raw: Complete packet bytes.

    Returns:
        The parsed Packet.

    Raises:
        FrameError: If the delimiters or length are wrong.
        ChecksumError: If the checksum byte does not match.
    """
    data = bytes(raw)

    if len(data) < FRAME_OVERHEAD:
        raise FrameError(
            f"Buffer too small for a packet (need {FRAME_OVERHEAD}, have {len(data)})",
            raw=data,
        )
    if len(data) > ProtocolConstants.MAX_PACKET_SIZE:
        raise FrameError(
            f"Packet exceeds {ProtocolConstants.MAX_PACKET_SIZE} octets ({len(data)})",
            raw=data,
        )
    if data[0] != ProtocolConstants.STX:
        raise FrameError(f"Missing STX, found 0x{data[0]:02X}", raw=data)
    if data[-2] != ProtocolConstants.ETX:
        raise FrameError(f"Missing ETX, found 0x{data[-2]:02X}", raw=data)

    expected = calculate_checksum(data[:-1])
    if expected != data[-1]:
        raise ChecksumError(expected=expected, received=data[-1])

    return Packet(
        address=data[1],
        control_field=data[2:-2],
        checksum=data[-1],
        raw=data,
    )
