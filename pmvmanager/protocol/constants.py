"""
PMV protocol constants and code tables.

Covers frame delimiters, reply sentinels, protocol limits, and the single
character codes used for operating modes and text styles.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Final


class Mode(str, Enum):
    """Device operating modes."""

    AUTOMATIC = "automatic"
    """Device follows its own schedule."""

    FORCE = "force"
    """Device shows the messages written by the control center."""

    OFF = "off"
    """Display switched off."""


class Style(str, Enum):
    """Text styles for a displayed row."""

    NORMAL = "normal"
    BLINKING = "blinking"
    BOLD = "bold"


class ResponseKind(Enum):
    """How the reply to a command is decoded."""

    STATUS = "status"
    """Bare ACK/NAK sentinel, decoded to a bool."""

    MODE = "mode"
    """Mode code at offset 4."""

    ROWS_NUMBER = "rows_number"
    """ASCII digit count between offset 4 and the trailing framing bytes."""

    MESSAGE = "message"
    """Style code at offset 4 followed by the message text."""


class ProtocolConstants:
    """
    PMV protocol constants.

    Contains frame delimiters, reply sentinels, timing values and field
    limits used throughout the protocol implementation.
    """

    # ===== Frame Delimiters =====

    STX: Final[int] = 0x02
    """Start of frame delimiter."""

    ETX: Final[int] = 0x03
    """End of frame delimiter."""

    CR: Final[int] = 0x0D
    """Message text terminator in WriteMessage control fields."""

    # ===== Reply Sentinels =====

    ACK: Final[bytes] = b"\x06" * 5
    """Command accepted."""

    NAK: Final[bytes] = b"\x15" * 5
    """Command rejected."""

    # ===== Transport =====

    DEFAULT_PORT: Final[int] = 10
    """Default UDP port of a PMV device."""

    DEFAULT_RESPONSE_TIMEOUT: Final[float] = 2.0
    """Default reply timeout in seconds."""

    MAX_PACKET_SIZE: Final[int] = 128
    """Maximum packet size in octets, both directions."""

    # ===== Field Limits =====

    MAX_ADDRESS: Final[int] = 0xFF
    """Addresses are a single octet."""

    MAX_ROW_INDEX: Final[int] = 9

    MAX_WRITE_MESSAGE_INDEX: Final[int] = 7
    """Highest message index for InitPage and WriteMessage."""

    MAX_READ_MESSAGE_INDEX: Final[int] = 8
    """Highest message index for GetMessage."""

    MAX_PAGE_INDEX: Final[int] = 4

    PAGES_PER_MESSAGE: Final[int] = 5
    """Number of page durations carried by InitPage."""

    MAX_PAGE_DURATION: Final[int] = 180
    """Longest page duration in seconds."""

    PAGE_DURATION_NOT_SET: Final[int] = 255
    """Duration sentinel: page shown indefinitely / not set."""


MODES: Final[Mapping[Mode, str]] = MappingProxyType({
    Mode.AUTOMATIC: "0",
    Mode.FORCE: "1",
    Mode.OFF: "2",
})
"""Mode to control-field code."""

STYLES: Final[Mapping[Style, str]] = MappingProxyType({
    Style.NORMAL: "0",
    Style.BLINKING: "1",
    Style.BOLD: "2",
})
"""Style to control-field code."""

MODE_CODES: Final[Mapping[str, Mode]] = MappingProxyType(
    {code: mode for mode, code in MODES.items()}
)
"""Control-field code to mode."""

STYLE_CODES: Final[Mapping[str, Style]] = MappingProxyType(
    {code: style for style, code in STYLES.items()}
)
"""Control-field code to style."""
