"""
pmvmanager - Python library for controlling PMV variable-message signs.

This library builds PMV protocol commands, frames them into packets, sends
them to a sign over UDP and decodes the sign's reply.

Example:
    >>> from pmvmanager import PmvClient, Mode
    >>>
    >>> client = PmvClient(0x05, "10.0.0.21")
    >>> client.switch_to_mode(Mode.FORCE)
    True
    >>> client.write_message("FOG", row_index=0, message_index=7, page_index=0)
    True
"""

from pmvmanager.client import PmvClient
from pmvmanager.exceptions import (
    ChecksumError,
    CommandRejectedError,
    CommandValidationError,
    FrameError,
    InvalidAddressError,
    InvalidMessageIndexError,
    InvalidMessageTextError,
    InvalidModeError,
    InvalidPageDurationError,
    InvalidPageIndexError,
    InvalidRowIndexError,
    InvalidStyleError,
    NetworkError,
    PacketSizeError,
    PmvManagerError,
    ProtocolError,
    TimeoutError,
)
from pmvmanager.models import (
    Command,
    GetMessageCommand,
    GetModeCommand,
    GetRowsNumberCommand,
    InitPageCommand,
    MessageReadback,
    SwitchToModeCommand,
    TestCommand,
    WriteMessageCommand,
    parse_command,
)
from pmvmanager.protocol.constants import Mode, ProtocolConstants, Style
from pmvmanager.transport import AbstractTransport, UdpTransport

__version__ = "0.1.0"
__all__ = [
    # Client
    "PmvClient",
    # Commands
    "Command",
    "TestCommand",
    "SwitchToModeCommand",
    "InitPageCommand",
    "WriteMessageCommand",
    "GetModeCommand",
    "GetRowsNumberCommand",
    "GetMessageCommand",
    "parse_command",
    # Models
    "MessageReadback",
    "Mode",
    "Style",
    "ProtocolConstants",
    # Exceptions
    "PmvManagerError",
    "CommandValidationError",
    "InvalidModeError",
    "InvalidStyleError",
    "InvalidRowIndexError",
    "InvalidMessageIndexError",
    "InvalidPageIndexError",
    "InvalidPageDurationError",
    "InvalidMessageTextError",
    "InvalidAddressError",
    "PacketSizeError",
    "TimeoutError",
    "NetworkError",
    "ProtocolError",
    "CommandRejectedError",
    "FrameError",
    "ChecksumError",
    # Transport
    "AbstractTransport",
    "UdpTransport",
    # Version
    "__version__",
]
