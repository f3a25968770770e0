#!/usr/bin/env python3
"""Write selected channels' message ids to a plain text report."""

import logging
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_PATH = Path("exported_channels.txt")


def group_message_ids(pairs: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Group ``(channel_id, message_id)`` pairs by channel.

    Channels come out in lexicographic order; message ids keep the order in
    which they were appended.
    """
    grouped: dict[str, list[str]] = {}
    for channel_id, message_id in pairs:
        grouped.setdefault(channel_id, []).append(message_id)
    return {channel_id: grouped[channel_id] for channel_id in sorted(grouped)}


def export_to_txt(
    pairs: Iterable[tuple[str, str]], output_path: Path = DEFAULT_EXPORT_PATH
) -> Path:
    """Write the grouped report, replacing any existing file at ``output_path``.

    Each channel becomes a block of three lines::

        <channel_id>:
        <id>, <id>, ...
        <blank>
    """
    grouped = group_message_ids(pairs)
    with open(output_path, "w", encoding="utf-8") as f:
        for channel_id, message_ids in grouped.items():
            f.write(f"{channel_id}:\n")
            f.write(", ".join(message_ids) + "\n")
            f.write("\n")

    logger.info(
        "Conversion completed. The file has been saved as %s", output_path
    )
    return output_path
