"""
Field encoding rules for PMV control fields.

Control fields are plain ASCII. Numeric parameters are sent as zero-padded
decimal digit strings of fixed width, and enumerated parameters as single
code characters:

- Index 7 in a 2-digit field is sent as "07"
- Duration 45 in a 3-digit field is sent as "045"
- Mode FORCE is sent as "1"

The check_* helpers validate a raw parameter and raise the field's
CommandValidationError subclass; they are used by the command models.
"""

from __future__ import annotations

from pmvmanager.exceptions import (
    CommandValidationError,
    InvalidAddressError,
    InvalidModeError,
    InvalidPageDurationError,
    InvalidStyleError,
)
from pmvmanager.protocol.constants import MODES, STYLES, Mode, ProtocolConstants, Style


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a valid protocol number
    return isinstance(value, int) and not isinstance(value, bool)


def check_index(
    value: object,
    maximum: int,
    error: type[CommandValidationError],
) -> int:
    """
    Validate an index parameter against the closed range 0..maximum.

    Args:
        value: Candidate index.
        maximum: Highest accepted index (inclusive).
        error: Exception class to raise for this field.

    Returns:
        The validated index.

    Raises:
        CommandValidationError: The given subclass, if out of range or not an int.
    """
    if not _is_int(value) or not 0 <= value <= maximum:
        raise error(value, f"Invalid {error.field_name}: {value!r} (expected 0-{maximum})")
    return value


def check_duration(value: object) -> int:
    """
    Validate a page duration: 0-180 seconds, or 255 for "not set".

    Raises:
        InvalidPageDurationError: For any other value.
    """
    if _is_int(value) and (
        0 <= value <= ProtocolConstants.MAX_PAGE_DURATION
        or value == ProtocolConstants.PAGE_DURATION_NOT_SET
    ):
        return value
    raise InvalidPageDurationError(
        value,
        f"Invalid page duration: {value!r} "
        f"(expected 0-{ProtocolConstants.MAX_PAGE_DURATION} "
        f"or {ProtocolConstants.PAGE_DURATION_NOT_SET})",
    )


def check_address(value: object) -> int:
    """
    Validate a device address.

    Raises:
        InvalidAddressError: If the address does not fit in one octet.
    """
    if not _is_int(value) or not 0 <= value <= ProtocolConstants.MAX_ADDRESS:
        raise InvalidAddressError(
            value,
            f"Invalid device address: {value!r} (expected 0-{ProtocolConstants.MAX_ADDRESS})",
        )
    return value


def to_mode(value: object) -> Mode:
    """
    Coerce a mode name or Mode member to Mode.

    Raises:
        InvalidModeError: If value names no mode.
    """
    if isinstance(value, Mode):
        return value
    if isinstance(value, str):
        try:
            return Mode(value.lower())
        except ValueError:
            pass
    raise InvalidModeError(value, f"Invalid mode: {value!r} (expected one of {_names(Mode)})")


def to_style(value: object) -> Style:
    """
    Coerce a style name or Style member to Style.

    Raises:
        InvalidStyleError: If value names no style.
    """
    if isinstance(value, Style):
        return value
    if isinstance(value, str):
        try:
            return Style(value.lower())
        except ValueError:
            pass
    raise InvalidStyleError(value, f"Invalid style: {value!r} (expected one of {_names(Style)})")


def _names(enum_cls: type[Mode] | type[Style]) -> str:
    return ", ".join(member.value for member in enum_cls)


def encode_number(value: int, width: int) -> str:
    """
    Encode a validated number as a zero-padded decimal string.

    Example:
        >>> encode_number(7, 2)
        '07'
    """
    return f"{value:0{width}d}"


def encode_mode(mode: Mode) -> str:
    """Get the single-character code for a mode."""
    return MODES[mode]


def encode_style(style: Style) -> str:
    """Get the single-character code for a style."""
    return STYLES[style]


def encode_address(address: int) -> bytes:
    """
    Encode a device address as its single raw address byte.

    The address is written as a two-digit hex string and that string is
    packed as binary, so the byte value equals the address.

    Raises:
        InvalidAddressError: If the address does not fit in one octet.

    Example:
        >>> encode_address(0x05)
        b'\\x05'
    """
    return bytes.fromhex(f"{check_address(address):02x}")
