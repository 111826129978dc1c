"""
Data models for the PMV protocol.

This module contains Pydantic models representing:

- Commands, one frozen model per protocol operation
- Decoded reply records
"""

from pmvmanager.models.commands import (
    BaseCommand,
    Command,
    GetMessageCommand,
    GetModeCommand,
    GetRowsNumberCommand,
    InitPageCommand,
    SwitchToModeCommand,
    TestCommand,
    WriteMessageCommand,
    parse_command,
)
from pmvmanager.models.records import MessageReadback

__all__ = [
    # Commands
    "BaseCommand",
    "Command",
    "TestCommand",
    "SwitchToModeCommand",
    "InitPageCommand",
    "WriteMessageCommand",
    "GetModeCommand",
    "GetRowsNumberCommand",
    "GetMessageCommand",
    "parse_command",
    # Records
    "MessageReadback",
]
