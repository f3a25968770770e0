#!/usr/bin/env python3
"""Commands typed at the browser's ``:`` prompt."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from .archive import ArchiveError, ChannelArchive
from .export import DEFAULT_EXPORT_PATH, export_to_txt
from .models import ChannelSummary

logger = logging.getLogger(__name__)

EXPORT_COMMAND = "export"
QUIT_COMMANDS = ("exit", "quit")


class CommandOutcome(str, Enum):
    """What the browser should do after a command ran."""

    EXPORTED = "exported"
    QUIT = "quit"
    UNKNOWN = "unknown"


@dataclass
class CommandResult:
    outcome: CommandOutcome
    message: str
    output_path: Optional[Path] = None
    # Channels left out of an export because their message log was unreadable
    skipped: list[str] = field(default_factory=list)


def collect_selected_message_ids(
    channels: Sequence[ChannelSummary], archive: ChannelArchive
) -> tuple[list[tuple[str, str]], list[str]]:
    """Re-read the message logs of all selected channels.

    Returns the ``(channel_id, message_id)`` pairs in list order, and the ids
    of selected channels whose log could not be read or parsed.
    """
    pairs: list[tuple[str, str]] = []
    skipped: list[str] = []
    for channel in channels:
        if not channel.selected:
            continue
        try:
            message_ids = archive.load_message_ids(channel.channel_id)
        except ArchiveError as e:
            logger.debug("Skipping channel %s during export: %s", channel.channel_id, e)
            skipped.append(channel.channel_id)
            continue
        pairs.extend((channel.channel_id, message_id) for message_id in message_ids)
    return pairs, skipped


def export_selected(
    channels: Sequence[ChannelSummary],
    archive: ChannelArchive,
    output_path: Path = DEFAULT_EXPORT_PATH,
) -> CommandResult:
    pairs, skipped = collect_selected_message_ids(channels, archive)
    written = export_to_txt(pairs, output_path)

    message = f"Exported selected channels to {written}"
    if skipped:
        message += f" (skipped unreadable: {', '.join(skipped)})"
    return CommandResult(
        CommandOutcome.EXPORTED, message, output_path=written, skipped=skipped
    )


def dispatch_command(
    command: str,
    channels: Sequence[ChannelSummary],
    archive: ChannelArchive,
    output_path: Path = DEFAULT_EXPORT_PATH,
) -> CommandResult:
    """Run the command typed at the prompt (without the leading ``:``).

    Matching is exact. Unknown commands change nothing.
    """
    if command == EXPORT_COMMAND:
        return export_selected(channels, archive, output_path)
    if command in QUIT_COMMANDS:
        return CommandResult(CommandOutcome.QUIT, "Exiting...")
    return CommandResult(CommandOutcome.UNKNOWN, f"Unknown command: {command}")
