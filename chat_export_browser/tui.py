#!/usr/bin/env python3
"""Interactive Terminal User Interface for browsing and exporting channels."""

import signal
import threading
from enum import Enum
from pathlib import Path
from types import FrameType
from typing import Any, ClassVar, Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.widget import Widget
from textual.widgets import Static

from .archive import ChannelArchive
from .commands import CommandOutcome, CommandResult, dispatch_command
from .export import DEFAULT_EXPORT_PATH
from .models import ChannelSummary
from .state import BrowserState, viewport_height
from .utils import format_channel_row, format_header

LIST_TITLE = "Select Channels to Export"
HIGHLIGHT_STYLE = "yellow"
INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class BrowserExit(str, Enum):
    """How the browser session ended."""

    QUIT = "quit"
    ESCAPE = "escape"
    INTERRUPT = "interrupt"


class ChannelList(Widget):
    """The visible window of channel rows."""

    def __init__(self, state: BrowserState, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.state = state

    def render(self) -> Text:
        height = viewport_height(self.app.size.height)
        lines: list[Text] = []
        for index, channel in enumerate(
            self.state.visible_channels(height), start=self.state.offset
        ):
            style = HIGHLIGHT_STYLE if index == self.state.selected_index else ""
            lines.append(
                Text(
                    format_channel_row(channel),
                    style=style,
                    no_wrap=True,
                    overflow="crop",
                )
            )
        return Text("\n", no_wrap=True).join(lines)


class ChannelBrowser(App[BrowserExit]):
    """TUI for choosing which channels of an archive to export."""

    CSS = """
    Screen {
        layers: base overlay;
    }

    #column-header {
        height: 1;
        text-style: bold;
        text-wrap: nowrap;
        text-overflow: clip;
    }

    #channel-list {
        height: 1fr;
        border: solid $primary;
        border-left: none;
        border-right: none;
        border-title-color: magenta;
        text-wrap: nowrap;
        text-overflow: clip;
    }

    #command-line {
        dock: bottom;
        layer: overlay;
        height: 1;
        display: none;
    }
    """

    TITLE = "Chat Export Browser"
    ENABLE_COMMAND_PALETTE = False
    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("up", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("space", "toggle_channel", "Toggle"),
        Binding("colon", "command_mode", "Command"),
        Binding("escape", "leave", "Quit", show=False),
    ]

    state: BrowserState
    archive: ChannelArchive
    output_path: Path
    last_result: Optional[CommandResult]

    def __init__(
        self,
        channels: list[ChannelSummary],
        archive: ChannelArchive,
        output_path: Path = DEFAULT_EXPORT_PATH,
        stop_requested: Optional[threading.Event] = None,
    ):
        """Initialize the browser over an already loaded channel list."""
        super().__init__()
        self.theme = "gruvbox"
        self.state = BrowserState(channels)
        self.archive = archive
        self.output_path = output_path
        self.stop_requested = stop_requested or threading.Event()
        self.last_result = None

    def compose(self) -> ComposeResult:
        """Create the UI layout."""
        yield Static(Text(format_header()), id="column-header")
        yield ChannelList(self.state, id="channel-list")
        yield Static("", id="command-line")

    def on_mount(self) -> None:
        self.refresh_view()

    def on_resize(self) -> None:
        """Keep the cursor row on screen when the terminal shrinks."""
        self.state.scroll_into_view(self.viewport_height)
        self.refresh_view()

    @property
    def viewport_height(self) -> int:
        return viewport_height(self.size.height)

    def refresh_view(self) -> None:
        """Repaint the list, its title and the command line from ``state``."""
        # Resize can arrive before the widgets are composed
        for channel_list in self.query(ChannelList):
            channel_list.border_title = (
                f"{LIST_TITLE} ({self.state.offset + 1}/{len(self.state.channels)})"
            )
            channel_list.refresh()

        for command_line in self.query("#command-line").results(Static):
            command_line.display = self.state.command_mode
            command_line.update(Text(f":{self.state.command_input}"))

    def on_key(self, event: events.Key) -> None:
        """Start of every input cycle: honour interrupts, then command-line keys.

        Keys not consumed here fall through to ``BINDINGS``.
        """
        if self.stop_requested.is_set():
            event.prevent_default()
            event.stop()
            self.exit(BrowserExit.INTERRUPT)
            return

        if not self.state.command_mode:
            return

        event.prevent_default()
        event.stop()
        if event.key == "escape":
            self.state.cancel_command()
        elif event.key == "backspace":
            self.state.delete_command_char()
        elif event.key == "enter":
            self.run_command(self.state.take_command())
        elif event.is_printable and event.character:
            self.state.append_command_char(event.character)
        self.refresh_view()

    def check_action(
        self,
        action: str,
        parameters: tuple[object, ...],  # noqa: ARG002
    ) -> bool | None:
        """Navigation bindings are inactive while a command is being typed."""
        if self.state.command_mode and action in (
            "cursor_up",
            "cursor_down",
            "toggle_channel",
            "command_mode",
            "leave",
        ):
            return False
        return True

    def action_cursor_up(self) -> None:
        self.state.move_up()
        self.refresh_view()

    def action_cursor_down(self) -> None:
        self.state.move_down(self.viewport_height)
        self.refresh_view()

    def action_toggle_channel(self) -> None:
        self.state.toggle_selected()
        self.refresh_view()

    def action_command_mode(self) -> None:
        self.state.enter_command_mode()
        self.refresh_view()

    def action_leave(self) -> None:
        self.exit(BrowserExit.ESCAPE)

    async def action_quit(self) -> None:
        """Textual's ctrl+q leaves the same way as Escape."""
        self.exit(BrowserExit.ESCAPE)

    def run_command(self, command: str) -> None:
        """Dispatch a typed command and report the result."""
        try:
            result = dispatch_command(
                command, self.state.channels, self.archive, self.output_path
            )
        except OSError as e:
            self.notify(f"Error exporting channels: {e}", severity="error")
            return

        self.last_result = result
        if result.outcome is CommandOutcome.QUIT:
            self.exit(BrowserExit.QUIT)
        elif result.outcome is CommandOutcome.UNKNOWN:
            self.notify(result.message, severity="warning")
        elif result.skipped:
            self.notify(result.message, severity="warning")
        else:
            self.notify(result.message)


def _install_interrupt_handlers(stop_requested: threading.Event) -> dict[int, Any]:
    """Route interrupt signals to ``stop_requested``; return previous handlers."""

    def request_stop(signum: int, frame: Optional[FrameType]) -> None:  # noqa: ARG001
        stop_requested.set()

    previous: dict[int, Any] = {}
    for signum in INTERRUPT_SIGNALS:
        previous[signum] = signal.signal(signum, request_stop)
    return previous


def run_channel_browser(
    channels: list[ChannelSummary],
    archive: ChannelArchive,
    output_path: Path = DEFAULT_EXPORT_PATH,
) -> BrowserExit:
    """Run the channel browser TUI until the user leaves or it is interrupted."""
    stop_requested = threading.Event()
    previous_handlers = _install_interrupt_handlers(stop_requested)
    app = ChannelBrowser(channels, archive, output_path, stop_requested)
    try:
        result = app.run()
    except KeyboardInterrupt:
        # Textual handles terminal cleanup automatically
        return BrowserExit.INTERRUPT
    finally:
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)
    return result or BrowserExit.INTERRUPT
