"""
Protocol layer for PMV communication.

This module contains the low-level protocol handling:
- Protocol constants and mode/style code tables
- Field encoding rules
- XOR checksum calculation and validation
- Packet framing
- Reply decoding
"""

from pmvmanager.protocol.checksums import append_checksum, calculate_checksum, validate_checksum
from pmvmanager.protocol.constants import (
    MODE_CODES,
    MODES,
    STYLE_CODES,
    STYLES,
    Mode,
    ProtocolConstants,
    ResponseKind,
    Style,
)
from pmvmanager.protocol.encoding import (
    check_address,
    check_duration,
    check_index,
    encode_address,
    encode_mode,
    encode_number,
    encode_style,
    to_mode,
    to_style,
)
from pmvmanager.protocol.packet import Packet, build_packet, encode_packet, parse_packet
from pmvmanager.protocol.decoder import (
    Reply,
    decode_message,
    decode_mode,
    decode_response,
    decode_rows_number,
    decode_status,
)

__all__ = [
    # Constants
    "ProtocolConstants",
    "Mode",
    "Style",
    "ResponseKind",
    "MODES",
    "STYLES",
    "MODE_CODES",
    "STYLE_CODES",
    # Checksums
    "calculate_checksum",
    "validate_checksum",
    "append_checksum",
    # Encoding
    "check_address",
    "check_duration",
    "check_index",
    "encode_address",
    "encode_mode",
    "encode_number",
    "encode_style",
    "to_mode",
    "to_style",
    # Packets
    "Packet",
    "build_packet",
    "encode_packet",
    "parse_packet",
    # Decoding
    "Reply",
    "decode_response",
    "decode_status",
    "decode_mode",
    "decode_rows_number",
    "decode_message",
]
