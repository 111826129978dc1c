"""
PMV command models.

Each protocol operation is a frozen Pydantic model. The set of commands is
closed: `Command` is a discriminated union over the `kind` field, and each
variant carries its own validated parameters, its control field and the
kind of reply it expects.

| Command               | Control field                         |
|-----------------------|---------------------------------------|
| TestCommand           | WT                                    |
| SwitchToModeCommand   | WB + mode                             |
| InitPageCommand       | WF + msg(2) + 5 x duration(3)         |
| WriteMessageCommand   | WI + row(2) + msg(2) + page(2) + style + text + CR |
| GetModeCommand        | RB                                    |
| GetRowsNumberCommand  | RC                                    |
| GetMessageCommand     | RI + row(2) + msg(2) + page(2)        |

Parameter validation happens at construction. Out-of-range values raise the
field's CommandValidationError subclass directly; nothing is sent to a
device.

Example:
    >>> cmd = WriteMessageCommand(text="ROAD WORKS", row_index=0, message_index=7, page_index=0)
    >>> cmd.control_field
    'WI0007000ROAD WORKS\\r'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from pmvmanager.exceptions import (
    InvalidMessageIndexError,
    InvalidMessageTextError,
    InvalidPageDurationError,
    InvalidPageIndexError,
    InvalidRowIndexError,
)
from pmvmanager.protocol.constants import Mode, ProtocolConstants, ResponseKind, Style
from pmvmanager.protocol.encoding import (
    check_duration,
    check_index,
    encode_mode,
    encode_number,
    encode_style,
    to_mode,
    to_style,
)

INDEX_WIDTH = 2
DURATION_WIDTH = 3


class BaseCommand(BaseModel):
    """
    Common behaviour of all PMV commands.

    Subclasses set `operation` (the two-letter operation code) and override
    `_parameters` to append their encoded fields.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation: ClassVar[str]
    response_kind: ClassVar[ResponseKind] = ResponseKind.STATUS

    @property
    def control_field(self) -> str:
        """Operation code plus encoded parameters, without framing."""
        return self.operation + self._parameters()

    @property
    def is_read(self) -> bool:
        """Check if this command reads state back from the device."""
        return self.operation.startswith("R")

    def encode(self) -> bytes:
        """Get the control field as bytes."""
        return self.control_field.encode("latin-1")

    def _parameters(self) -> str:
        return ""


# ===== Write commands =====


class TestCommand(BaseCommand):
    """Check that the device is alive. Answered with ACK."""

    kind: Literal["test"] = "test"

    operation: ClassVar[str] = "WT"


class SwitchToModeCommand(BaseCommand):
    """Switch the device operating mode."""

    kind: Literal["switch_to_mode"] = "switch_to_mode"
    mode: Mode

    operation: ClassVar[str] = "WB"

    @field_validator("mode", mode="before")
    @classmethod
    def validate_mode(cls, v: Any) -> Mode:
        return to_mode(v)

    def _parameters(self) -> str:
        return encode_mode(self.mode)

    @classmethod
    def force(cls) -> SwitchToModeCommand:
        """Command putting the device in force mode."""
        return cls(mode=Mode.FORCE)


class InitPageCommand(BaseCommand):
    """
    Set up the paging of one message.

    Each of the five durations is the time in seconds a page stays on the
    display (0-180), or 255 when the page duration is not set.
    """

    kind: Literal["init_page"] = "init_page"
    message_index: int
    durations: tuple[int, int, int, int, int] = (
        ProtocolConstants.PAGE_DURATION_NOT_SET,
        0,
        0,
        0,
        0,
    )

    operation: ClassVar[str] = "WF"

    @field_validator("message_index", mode="before")
    @classmethod
    def validate_message_index(cls, v: Any) -> int:
        return check_index(v, ProtocolConstants.MAX_WRITE_MESSAGE_INDEX, InvalidMessageIndexError)

    @field_validator("durations", mode="before")
    @classmethod
    def validate_durations(cls, v: Any) -> tuple[int, ...]:
        if isinstance(v, (str, bytes)) or not hasattr(v, "__iter__"):
            raise InvalidPageDurationError(v, f"Page durations must be a sequence, got {v!r}")
        durations = tuple(v)
        if len(durations) != ProtocolConstants.PAGES_PER_MESSAGE:
            raise InvalidPageDurationError(
                v,
                f"Expected {ProtocolConstants.PAGES_PER_MESSAGE} page durations, "
                f"got {len(durations)}",
            )
        return tuple(check_duration(d) for d in durations)

    def _parameters(self) -> str:
        return encode_number(self.message_index, INDEX_WIDTH) + "".join(
            encode_number(d, DURATION_WIDTH) for d in self.durations
        )


class WriteMessageCommand(BaseCommand):
    """Write one row of text into a message page."""

    kind: Literal["write_message"] = "write_message"
    text: str
    row_index: int
    message_index: int
    page_index: int
    style: Style = Style.NORMAL

    operation: ClassVar[str] = "WI"

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise InvalidMessageTextError(v, f"Message text must be a string, got {v!r}")
        if "\r" in v:
            raise InvalidMessageTextError(v, "Message text must not contain a carriage return")
        try:
            v.encode("latin-1")
        except UnicodeEncodeError as e:
            raise InvalidMessageTextError(
                v, f"Message text is not Latin-1 encodable: {e.object[e.start:e.end]!r}"
            ) from e
        return v

    @field_validator("row_index", mode="before")
    @classmethod
    def validate_row_index(cls, v: Any) -> int:
        return check_index(v, ProtocolConstants.MAX_ROW_INDEX, InvalidRowIndexError)

    @field_validator("message_index", mode="before")
    @classmethod
    def validate_message_index(cls, v: Any) -> int:
        return check_index(v, ProtocolConstants.MAX_WRITE_MESSAGE_INDEX, InvalidMessageIndexError)

    @field_validator("page_index", mode="before")
    @classmethod
    def validate_page_index(cls, v: Any) -> int:
        return check_index(v, ProtocolConstants.MAX_PAGE_INDEX, InvalidPageIndexError)

    @field_validator("style", mode="before")
    @classmethod
    def validate_style(cls, v: Any) -> Style:
        return to_style(v)

    def _parameters(self) -> str:
        return (
            encode_number(self.row_index, INDEX_WIDTH)
            + encode_number(self.message_index, INDEX_WIDTH)
            + encode_number(self.page_index, INDEX_WIDTH)
            + encode_style(self.style)
            + self.text
            + chr(ProtocolConstants.CR)
        )


# ===== Read commands =====


class GetModeCommand(BaseCommand):
    """Read the device operating mode."""

    kind: Literal["get_mode"] = "get_mode"

    operation: ClassVar[str] = "RB"
    response_kind: ClassVar[ResponseKind] = ResponseKind.MODE


class GetRowsNumberCommand(BaseCommand):
    """Read the number of text rows on the display."""

    kind: Literal["get_rows_number"] = "get_rows_number"

    operation: ClassVar[str] = "RC"
    response_kind: ClassVar[ResponseKind] = ResponseKind.ROWS_NUMBER


class GetMessageCommand(BaseCommand):
    """Read back one row of a stored message page."""

    kind: Literal["get_message"] = "get_message"
    row_index: int
    message_index: int
    page_index: int

    operation: ClassVar[str] = "RI"
    response_kind: ClassVar[ResponseKind] = ResponseKind.MESSAGE

    @field_validator("row_index", mode="before")
    @classmethod
    def validate_row_index(cls, v: Any) -> int:
        return check_index(v, ProtocolConstants.MAX_ROW_INDEX, InvalidRowIndexError)

    @field_validator("message_index", mode="before")
    @classmethod
    def validate_message_index(cls, v: Any) -> int:
        return check_index(v, ProtocolConstants.MAX_READ_MESSAGE_INDEX, InvalidMessageIndexError)

    @field_validator("page_index", mode="before")
    @classmethod
    def validate_page_index(cls, v: Any) -> int:
        return check_index(v, ProtocolConstants.MAX_PAGE_INDEX, InvalidPageIndexError)

    def _parameters(self) -> str:
        return (
            encode_number(self.row_index, INDEX_WIDTH)
            + encode_number(self.message_index, INDEX_WIDTH)
            + encode_number(self.page_index, INDEX_WIDTH)
        )


Command = Annotated[
    Union[
        TestCommand,
        SwitchToModeCommand,
        InitPageCommand,
        WriteMessageCommand,
        GetModeCommand,
        GetRowsNumberCommand,
        GetMessageCommand,
    ],
    Field(discriminator="kind"),
]
"""Any PMV command, discriminated by `kind`."""

_COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(data: Mapping[str, Any]) -> Command:
    """
    Build a command from a plain mapping, such as decoded JSON.

    Args:
        data: Mapping with a `kind` key and the command's parameters.

    Returns:
        The validated command.

    Raises:
        CommandValidationError: If a parameter is out of range.
        pydantic.ValidationError: If `kind` is missing or unknown.

    Example:
        >>> parse_command({"kind": "switch_to_mode", "mode": "off"}).control_field
        'WB2'
    """
    return _COMMAND_ADAPTER.validate_python(data)
