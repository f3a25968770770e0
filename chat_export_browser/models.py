"""Pydantic models for the chat export archive JSON structures."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_SNOWFLAKE = 2**64 - 1


def decode_message_id(value: Any) -> Optional[str]:
    """Normalize a message ``ID`` to its canonical decimal string.

    Archives encode the id either as a JSON number or as a numeric string.
    Anything else (floats, booleans, negative numbers, free text) decodes to
    ``None`` so the message is skipped rather than failing the export.
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value) if 0 <= value <= MAX_SNOWFLAKE else None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        number = int(value)
        return str(number) if number <= MAX_SNOWFLAKE else None
    return None


class ChannelInfo(BaseModel):
    """Contents of a channel's ``channel.json`` metadata file."""

    id: str
    type: str


class MessageRecord(BaseModel):
    """One entry of a channel's ``messages.json`` log."""

    model_config = ConfigDict(populate_by_name=True)

    # Usually a string; any JSON value is accepted
    attachments: Any = Field(default="", alias="Attachments")
    message_id: Optional[str] = Field(default=None, alias="ID")

    @field_validator("message_id", mode="before")
    @classmethod
    def _decode_id(cls, value: Any) -> Optional[str]:
        return decode_message_id(value)

    @property
    def has_attachments(self) -> bool:
        return bool(self.attachments)


class ChannelSummary(BaseModel):
    """A channel row in the browser.

    Every field is fixed at load time except ``selected``, which only the
    user's toggle action changes.
    """

    channel_type: str
    display_name: str
    created_at: str
    channel_id: str
    message_count: int
    attachment_count: int
    selected: bool = True

    def sort_key(self) -> tuple[int, str, str]:
        """Most messages first, then type and name alphabetically."""
        return (-self.message_count, self.channel_type, self.display_name)
