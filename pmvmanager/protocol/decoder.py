"""
PMV reply decoding.

Replies have no common layout: how they are read depends on the command
that was sent. The command's `response_kind` selects the rule:

1. **STATUS** (Test, SwitchToMode, InitPage, WriteMessage)
   - ACK: 06 06 06 06 06 -> True
   - NAK: 15 15 15 15 15 -> False

2. **MODE** (GetMode)
   - Mode code at offset 4

3. **ROWS_NUMBER** (GetRowsNumber)
   - ASCII digits from offset 4 up to the last 2 framing bytes

4. **MESSAGE** (GetMessage)
   - Style code at offset 4
   - Message text from offset 5 up to the last 3 bytes (CR, ETX, CS)

Any reply that does not fit its rule raises ProtocolError; a NAK to a read
command raises CommandRejectedError. The raw bytes are handed to the rule
unmodified and framing bytes are only counted, not checked.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Union

from pmvmanager.exceptions import CommandRejectedError, ProtocolError
from pmvmanager.models.records import MessageReadback
from pmvmanager.protocol.constants import (
    MODE_CODES,
    STYLE_CODES,
    Mode,
    ProtocolConstants,
    ResponseKind,
)

if TYPE_CHECKING:
    from pmvmanager.models.commands import BaseCommand

logger = logging.getLogger(__name__)

Reply = Union[bool, Mode, int, MessageReadback]
"""Any decoded reply."""

# Offsets into structured replies
PAYLOAD_OFFSET = 4
TEXT_OFFSET = 5
ROWS_TRAILER = 2  # ETX + CS
MESSAGE_TRAILER = 3  # CR + ETX + CS


def decode_status(raw: bytes) -> bool:
    """
    Decode a bare ACK/NAK reply.

    Raises:
        ProtocolError: If the reply is neither sentinel.
    """
    if raw == ProtocolConstants.ACK:
        return True
    if raw == ProtocolConstants.NAK:
        return False
    raise ProtocolError("Expected ACK or NAK", raw=raw)


def _check_structured(raw: bytes, min_size: int, what: str) -> None:
    if raw == ProtocolConstants.NAK:
        raise CommandRejectedError(f"Device rejected {what} request", raw=raw)
    if len(raw) < min_size:
        raise ProtocolError(
            f"Reply too short for {what} (need {min_size}, have {len(raw)})",
            raw=raw,
        )


def decode_mode(raw: bytes) -> Mode:
    """
    Decode a GetMode reply.

    Raises:
        CommandRejectedError: If the device answered NAK.
        ProtocolError: If the reply is too short or the mode code is unknown.
    """
    _check_structured(raw, PAYLOAD_OFFSET + 1, "mode")

    code = chr(raw[PAYLOAD_OFFSET])
    try:
        return MODE_CODES[code]
    except KeyError:
        raise ProtocolError(f"Unknown mode code {code!r}", raw=raw) from None


def decode_rows_number(raw: bytes) -> int:
    """
    Decode a GetRowsNumber reply.

    Raises:
        CommandRejectedError: If the device answered NAK.
        ProtocolError: If the count is missing or not decimal digits.
    """
    _check_structured(raw, PAYLOAD_OFFSET + 1 + ROWS_TRAILER, "rows number")

    digits = raw[PAYLOAD_OFFSET:-ROWS_TRAILER]
    # isdigit() on bytes is ASCII-only
    if not digits.isdigit():
        raise ProtocolError(f"Rows number is not a decimal number: {digits!r}", raw=raw)
    return int(digits)


def decode_message(raw: bytes) -> MessageReadback:
    """
    Decode a GetMessage reply.

    Raises:
        CommandRejectedError: If the device answered NAK.
        ProtocolError: If the reply is too short or the style code is unknown.
    """
    _check_structured(raw, TEXT_OFFSET + MESSAGE_TRAILER, "message")

    code = chr(raw[PAYLOAD_OFFSET])
    try:
        style = STYLE_CODES[code]
    except KeyError:
        raise ProtocolError(f"Unknown style code {code!r}", raw=raw) from None

    text = raw[TEXT_OFFSET:-MESSAGE_TRAILER].decode("latin-1")
    return MessageReadback(style=style, text=text)


_DECODERS: dict[ResponseKind, Callable[[bytes], Reply]] = {
    ResponseKind.STATUS: decode_status,
    ResponseKind.MODE: decode_mode,
    ResponseKind.ROWS_NUMBER: decode_rows_number,
    ResponseKind.MESSAGE: decode_message,
}


def decode_response(command: BaseCommand, raw: bytes | bytearray | memoryview) -> Reply:
    """
    Decode the reply to a command.

    Args:
        command: The command that was sent.
        raw: Reply bytes exactly as received.

    Returns:
        bool for write commands, Mode for GetMode, int for GetRowsNumber,
        MessageReadback for GetMessage.

    Raises:
        ProtocolError: If the reply does not fit the command.
    """
    data = bytes(raw)
    result = _DECODERS[command.response_kind](data)
    logger.debug("Decoded %s reply: %r", command.operation, result)
    return result
