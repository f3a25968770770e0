"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Any, Optional

import pytest

from chat_export_browser.archive import ChannelArchive
from chat_export_browser.models import ChannelSummary


class ArchiveBuilder:
    """Writes a chat export archive layout under a temporary directory."""

    def __init__(self, root: Path):
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)
        self.index: dict[str, str] = {}

    def add_channel(
        self,
        channel_id: str,
        label: str,
        channel_type: str = "GUILD_TEXT",
        messages: Optional[list[dict[str, Any]]] = None,
        write_info: bool = True,
        write_messages: bool = True,
    ) -> Path:
        self.index[channel_id] = label
        channel_dir = self.root / f"c{channel_id}"
        channel_dir.mkdir(exist_ok=True)
        if write_info:
            (channel_dir / "channel.json").write_text(
                json.dumps({"id": channel_id, "type": channel_type}),
                encoding="utf-8",
            )
        if write_messages:
            (channel_dir / "messages.json").write_text(
                json.dumps(messages if messages is not None else []),
                encoding="utf-8",
            )
        self.write_index()
        return channel_dir

    def write_index(self) -> None:
        (self.root / "index.json").write_text(
            json.dumps(self.index), encoding="utf-8"
        )

    @property
    def archive(self) -> ChannelArchive:
        return ChannelArchive(self.root)


def make_messages(*ids: Any, attachments: int = 0) -> list[dict[str, Any]]:
    """Message records with the given IDs; the first ``attachments`` carry a file."""
    return [
        {
            "ID": message_id,
            "Timestamp": "2021-01-01 00:00:00",
            "Contents": "hi",
            "Attachments": "https://cdn.example/file.png" if i < attachments else "",
        }
        for i, message_id in enumerate(ids)
    ]


def make_summary(
    channel_id: str = "175928847299117063",
    display_name: str = "general",
    channel_type: str = "GUILD_TEXT",
    message_count: int = 1,
    attachment_count: int = 0,
    selected: bool = True,
) -> ChannelSummary:
    return ChannelSummary(
        channel_type=channel_type,
        display_name=display_name,
        created_at="April 2016",
        channel_id=channel_id,
        message_count=message_count,
        attachment_count=attachment_count,
        selected=selected,
    )


@pytest.fixture
def archive_builder(tmp_path: Path) -> ArchiveBuilder:
    """Empty archive rooted at ``tmp_path / "messages"``."""
    return ArchiveBuilder(tmp_path / "messages")


@pytest.fixture
def sample_archive(archive_builder: ArchiveBuilder) -> ArchiveBuilder:
    """Archive with two guild channels, a DM and an empty channel."""
    archive_builder.add_channel(
        "175928847299117063",
        "general in My Server",
        messages=make_messages(11, "12", 13, attachments=1),
    )
    archive_builder.add_channel(
        "381870553235193857",
        "Direct Message with alice#0001",
        channel_type="DM",
        messages=make_messages("21", 22),
    )
    archive_builder.add_channel(
        "500000000000000000",
        "random in My Server",
        messages=make_messages(31, 32),
    )
    archive_builder.add_channel(
        "600000000000000000",
        "empty in My Server",
        messages=[],
    )
    return archive_builder
