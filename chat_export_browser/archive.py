#!/usr/bin/env python3
"""Loading channel summaries from an on-disk chat export archive."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from .models import ChannelInfo, ChannelSummary, MessageRecord
from .utils import snowflake_to_month_year, strip_dm_prefix, update_label

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_DIR = Path("messages")
INDEX_FILENAME = "index.json"
CHANNEL_FILENAME = "channel.json"
MESSAGES_FILENAME = "messages.json"

_INDEX_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])
_MESSAGES_ADAPTER: TypeAdapter[list[MessageRecord]] = TypeAdapter(
    list[MessageRecord]
)


class ArchiveError(Exception):
    """Raised when the archive is missing or malformed."""


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ArchiveError(f"Failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ArchiveError(f"Invalid JSON in {path}: {e}") from e


class ChannelArchive:
    """Read access to an archive rooted at ``root``.

    Layout::

        <root>/index.json            channel id -> label
        <root>/c<id>/channel.json    {"id": ..., "type": ...}
        <root>/c<id>/messages.json   [{"ID": ..., "Attachments": ...}, ...]
    """

    def __init__(self, root: Path = DEFAULT_ARCHIVE_DIR):
        self.root = root

    @property
    def index_path(self) -> Path:
        return self.root / INDEX_FILENAME

    def channel_dir(self, channel_id: str) -> Path:
        return self.root / f"c{channel_id}"

    def channel_info_path(self, channel_id: str) -> Path:
        return self.channel_dir(channel_id) / CHANNEL_FILENAME

    def messages_path(self, channel_id: str) -> Path:
        return self.channel_dir(channel_id) / MESSAGES_FILENAME

    def load_index(self) -> dict[str, str]:
        """Load the raw channel id to label mapping."""
        data = _read_json(self.index_path)
        try:
            return _INDEX_ADAPTER.validate_python(data)
        except ValidationError as e:
            raise ArchiveError(f"Malformed index {self.index_path}: {e}") from e

    def preprocess_index(self, index: dict[str, str]) -> dict[str, str]:
        """Normalize every label and write the result back to the index file."""
        updated = {
            channel_id: update_label(label) for channel_id, label in index.items()
        }
        try:
            with open(self.index_path, "w", encoding="utf-8") as f:
                json.dump(updated, f, indent=2, sort_keys=True, ensure_ascii=False)
        except OSError as e:
            raise ArchiveError(f"Failed to write {self.index_path}: {e}") from e
        return updated

    def load_channel_info(self, channel_id: str) -> ChannelInfo:
        path = self.channel_info_path(channel_id)
        data = _read_json(path)
        try:
            return ChannelInfo.model_validate(data)
        except ValidationError as e:
            raise ArchiveError(f"Malformed channel metadata {path}: {e}") from e

    def load_messages(self, channel_id: str) -> list[MessageRecord]:
        """Load and validate a channel's message log."""
        path = self.messages_path(channel_id)
        data = _read_json(path)
        try:
            return _MESSAGES_ADAPTER.validate_python(data)
        except ValidationError as e:
            raise ArchiveError(f"Malformed message log {path}: {e}") from e

    def load_message_ids(self, channel_id: str) -> list[str]:
        """Canonical message ids of a channel, in on-disk order.

        Records whose id is neither an integer nor a numeric string are
        skipped.
        """
        return [
            record.message_id
            for record in self.load_messages(channel_id)
            if record.message_id is not None
        ]

    def build_summary(self, channel_id: str, label: str) -> Optional[ChannelSummary]:
        """Summarize one indexed channel.

        Returns None when the channel has no metadata or message log on disk,
        or when its log is empty.
        """
        if not (
            self.channel_info_path(channel_id).exists()
            and self.messages_path(channel_id).exists()
        ):
            logger.debug("Skipping channel %s: export files missing", channel_id)
            return None

        info = self.load_channel_info(channel_id)
        try:
            created_at = snowflake_to_month_year(info.id)
        except ValueError as e:
            raise ArchiveError(f"Channel {channel_id}: {e}") from e

        messages = self.load_messages(channel_id)
        if not messages:
            logger.debug("Skipping channel %s: no messages", channel_id)
            return None

        return ChannelSummary(
            channel_type=info.type,
            display_name=strip_dm_prefix(label),
            created_at=created_at,
            channel_id=info.id,
            message_count=len(messages),
            attachment_count=sum(1 for m in messages if m.has_attachments),
        )

    def load_channels(self) -> list[ChannelSummary]:
        """Load, normalize and sort all channels listed in the index.

        Raises:
            ArchiveError: if the index or any present channel file is
                unreadable or malformed.
        """
        index = self.preprocess_index(self.load_index())

        channels: list[ChannelSummary] = []
        for channel_id in sorted(index):
            summary = self.build_summary(channel_id, index[channel_id])
            if summary is not None:
                channels.append(summary)

        channels.sort(key=ChannelSummary.sort_key)
        logger.debug("Loaded %d channels from %s", len(channels), self.root)
        return channels
