"""
Pydantic models for decoded PMV replies.

Status, mode and row-count replies decode to plain values (bool, Mode,
int). A message read-back carries two fields and gets its own record.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pmvmanager.protocol.constants import Style


class MessageReadback(BaseModel):
    """
    One row of a stored message, as read back from the device.

    Example:
        >>> row = MessageReadback(style=Style.BLINKING, text="QUEUE AHEAD")
        >>> str(row)
        'QUEUE AHEAD'
    """

    model_config = ConfigDict(frozen=True)

    style: Style = Field(description="Text style of the row")
    text: str = Field(description="Row text, without terminator")

    def __str__(self) -> str:
        return self.text
