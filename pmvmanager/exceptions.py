"""
Exception hierarchy for pmvmanager.

All exceptions inherit from PmvManagerError, providing a clean hierarchy
for error handling:

1. Validation errors are raised while a command is built, before any I/O
2. Packet size errors are raised while a command is framed
3. Timeout and network errors come from the UDP exchange
4. Protocol errors are raised when a reply does not fit the command sent
"""

from __future__ import annotations


class PmvManagerError(Exception):
    """
    Base exception for all pmvmanager errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch all pmvmanager errors with a single except clause.
    """

    pass


# ===== Validation errors =====


class CommandValidationError(PmvManagerError):
    """
    A command parameter is outside the range accepted by the device.

    Subclasses identify which field was rejected. These errors propagate
    unchanged out of the pydantic validators, so callers never see them
    wrapped in a pydantic ValidationError.
    """

    field_name: str = "value"

    def __init__(self, value: object, message: str | None = None) -> None:
        self.value = value
        super().__init__(message or f"Invalid {self.field_name}: {value!r}")


class InvalidModeError(CommandValidationError):
    """Mode is not one of automatic, force, off."""

    field_name = "mode"


class InvalidStyleError(CommandValidationError):
    """Style is not one of normal, blinking, bold."""

    field_name = "style"


class InvalidRowIndexError(CommandValidationError):
    """Row index is outside the range of the command."""

    field_name = "row index"


class InvalidMessageIndexError(CommandValidationError):
    """Message index is outside the range of the command."""

    field_name = "message index"


class InvalidPageIndexError(CommandValidationError):
    """Page index is outside the range of the command."""

    field_name = "page index"


class InvalidPageDurationError(CommandValidationError):
    """Page duration is neither 0-180 nor the 255 sentinel."""

    field_name = "page duration"


class InvalidMessageTextError(CommandValidationError):
    """Message text cannot be carried in a WriteMessage control field."""

    field_name = "message text"


class InvalidAddressError(CommandValidationError):
    """Device address does not fit in a single octet."""

    field_name = "device address"


# ===== Framing errors =====


class PacketSizeError(PmvManagerError):
    """
    Encoded packet exceeds the protocol's maximum size.

    The 128-octet limit is a hard protocol limit; packets are never
    truncated to fit.
    """

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Packet is {size} octets, limit is {limit}")


# ===== Exchange errors =====


class TimeoutError(PmvManagerError):  # noqa: A001 - intentionally shadows builtin
    """
    No reply within the configured bound.

    The command may or may not have reached the device. This library never
    retries; the caller decides.
    """

    def __init__(
        self,
        message: str = "No reply from device",
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        super().__init__(message)
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds is not None:
            return f"{base} (after {self.timeout_seconds:.1f}s)"
        return base


class NetworkError(PmvManagerError):
    """
    The device endpoint could not be reached.

    Raised for name resolution failures, unreachable destinations and any
    other socket-level failure during the exchange.
    """

    def __init__(
        self,
        message: str,
        *,
        host: str | None = None,
        port: int | None = None,
    ) -> None:
        super().__init__(message)
        self.host = host
        self.port = port

    def __str__(self) -> str:
        base = super().__str__()
        if self.host is not None:
            return f"{base} ({self.host}:{self.port})"
        return base


# ===== Protocol errors =====


class ProtocolError(PmvManagerError):
    """
    Protocol-level error.

    Raised when a reply does not match the shape expected for the command
    that was sent, such as:
    - A write command answered with something other than ACK/NAK
    - A structured reply too short to hold its fields
    - An unknown mode or style code
    """

    def __init__(self, message: str, *, raw: bytes | None = None) -> None:
        super().__init__(message)
        self.raw = raw

    def __str__(self) -> str:
        base = super().__str__()
        if self.raw:
            display = self.raw[:16].hex(" ")
            if len(self.raw) > 16:
                display += " ..."
            return f"{base} [raw: {display}]"
        return base


class CommandRejectedError(ProtocolError):
    """The device answered a read command with NAK."""

    pass


class FrameError(ProtocolError):
    """
    Frame parsing error.

    Raised when a packet cannot be parsed, such as:
    - Missing STX or ETX delimiter
    - Buffer too small to hold a frame
    """

    pass


class ChecksumError(ProtocolError):
    """
    Checksum validation failure.

    Raised when a frame's checksum byte doesn't match the XOR of the
    preceding bytes.
    """

    def __init__(
        self,
        message: str = "Checksum validation failed",
        *,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.received = received

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.received is not None:
            return f"{base} (expected 0x{self.expected:02X}, got 0x{self.received:02X})"
        return base
