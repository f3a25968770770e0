#!/usr/bin/env python3
"""Utility functions for label normalization and row formatting."""

from datetime import datetime, timezone

from .models import MAX_SNOWFLAKE, ChannelSummary

DIRECT_MESSAGE_PREFIX = "Direct Message with "
DM_DISPLAY_PREFIX = "DM - "
GROUP_SEPARATOR = " in "

# Milliseconds between the Unix epoch and the first second of 2015 (UTC)
SNOWFLAKE_EPOCH_MS = 1420070400000

COLUMN_WIDTHS = (8, 30, 15, 10, 12)
COLUMN_TITLES = ("Type", "Name", "Date", "Msgs", "Attchs")
ELLIPSIS = "..."


def update_label(label: str) -> str:
    """Rewrite a raw index label into its display form.

    "Direct Message with alice" becomes "alice" and
    "general in My Server" becomes "My Server - general".
    Anything else is returned unchanged.
    """
    if label.startswith(DIRECT_MESSAGE_PREFIX):
        return label[len(DIRECT_MESSAGE_PREFIX) :]
    subject, separator, container = label.rpartition(GROUP_SEPARATOR)
    if separator:
        return f"{container} - {subject}"
    return label


def strip_dm_prefix(name: str) -> str:
    """Drop the "DM - " marker from a private conversation name."""
    if name.startswith(DM_DISPLAY_PREFIX):
        return name[len(DM_DISPLAY_PREFIX) :]
    return name


def parse_snowflake(snowflake: str) -> int:
    """Parse an unsigned 64-bit snowflake id.

    Raises:
        ValueError: if the id is not ASCII digits or overflows 64 bits.
    """
    if not (snowflake.isascii() and snowflake.isdigit()):
        raise ValueError(f"Invalid snowflake ID: {snowflake!r}")
    value = int(snowflake)
    if value > MAX_SNOWFLAKE:
        raise ValueError(f"Snowflake ID out of range: {snowflake!r}")
    return value


def snowflake_timestamp_ms(snowflake: str) -> int:
    return (parse_snowflake(snowflake) >> 22) + SNOWFLAKE_EPOCH_MS


def snowflake_to_month_year(snowflake: str) -> str:
    """Format the creation date encoded in a snowflake as e.g. "April 2016"."""
    timestamp_ms = snowflake_timestamp_ms(snowflake)
    dt = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return dt.strftime("%B %Y")


def truncate_name(name: str, width: int = COLUMN_WIDTHS[1]) -> str:
    """Shorten ``name`` so that it, ellipsis included, fits in ``width``."""
    if len(name) > width:
        return name[: max(width - len(ELLIPSIS), 0)] + ELLIPSIS
    return name


def _format_columns(cells: tuple[str, str, str, str, str]) -> str:
    type_w, name_w, date_w, msgs_w, attach_w = COLUMN_WIDTHS
    return (
        f"{cells[0]:<{type_w}} {cells[1]:<{name_w}} {cells[2]:<{date_w}} "
        f"{cells[3]:>{msgs_w}} {cells[4]:>{attach_w}}"
    )


def format_header() -> str:
    """Fixed-width column header line."""
    return _format_columns(COLUMN_TITLES)


def format_channel_row(channel: ChannelSummary) -> str:
    """Format one channel as a fixed-width row with its selection marker."""
    indicator = "[x]" if channel.selected else "[ ]"
    return _format_columns(
        (
            indicator,
            truncate_name(channel.display_name),
            channel.created_at,
            str(channel.message_count),
            str(channel.attachment_count),
        )
    )
