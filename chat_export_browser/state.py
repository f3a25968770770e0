#!/usr/bin/env python3
"""Cursor, scroll and command-line state of the channel browser."""

from dataclasses import dataclass

from .models import ChannelSummary

# Column header line plus the list's top and bottom border
CHROME_HEIGHT = 3


def viewport_height(terminal_height: int) -> int:
    """Number of channel rows visible in a terminal of the given height."""
    return max(terminal_height - CHROME_HEIGHT, 0)


@dataclass
class BrowserState:
    """All mutable UI state, owned by the render loop.

    ``offset`` is the index of the topmost visible row and never exceeds
    ``selected_index``.
    """

    channels: list[ChannelSummary]
    selected_index: int = 0
    offset: int = 0
    command_mode: bool = False
    command_input: str = ""

    @property
    def current(self) -> ChannelSummary | None:
        if not self.channels:
            return None
        return self.channels[self.selected_index]

    def visible_channels(self, height: int) -> list[ChannelSummary]:
        return self.channels[self.offset : self.offset + height]

    def move_up(self) -> None:
        if self.selected_index > 0:
            self.selected_index -= 1
            if self.selected_index < self.offset:
                self.offset -= 1

    def move_down(self, height: int) -> None:
        if self.selected_index < len(self.channels) - 1:
            self.selected_index += 1
            if self.selected_index >= self.offset + height:
                self.offset += 1

    def scroll_into_view(self, height: int) -> None:
        """Shift ``offset`` so the cursor row fits a viewport of ``height``."""
        if height > 0 and self.selected_index >= self.offset + height:
            self.offset = self.selected_index - height + 1

    def toggle_selected(self) -> None:
        channel = self.current
        if channel is not None:
            channel.selected = not channel.selected

    def selected_channels(self) -> list[ChannelSummary]:
        return [channel for channel in self.channels if channel.selected]

    def enter_command_mode(self) -> None:
        self.command_mode = True
        self.command_input = ""

    def append_command_char(self, char: str) -> None:
        self.command_input += char

    def delete_command_char(self) -> None:
        self.command_input = self.command_input[:-1]

    def cancel_command(self) -> None:
        self.command_mode = False
        self.command_input = ""

    def take_command(self) -> str:
        """Return the typed command and leave command mode."""
        command = self.command_input
        self.cancel_command()
        return command
