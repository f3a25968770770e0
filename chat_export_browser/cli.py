#!/usr/bin/env python3
"""CLI interface for chat-export-browser."""

import logging
import sys
from pathlib import Path

import click
from textual.logging import TextualHandler

from .archive import DEFAULT_ARCHIVE_DIR, ArchiveError, ChannelArchive
from .export import DEFAULT_EXPORT_PATH


def _configure_logging(debug: bool) -> None:
    # TextualHandler writes to stderr outside the app and to the Textual log inside it
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
        handlers=[TextualHandler()],
    )


@click.command()
@click.option(
    "--archive-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=DEFAULT_ARCHIVE_DIR,
    show_default=True,
    help="Directory holding index.json and the c<id>/ channel folders.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_EXPORT_PATH,
    show_default=True,
    help="File written by the :export command (overwritten each time).",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Show full traceback on errors and enable debug logging.",
)
def main(archive_dir: Path, output: Path, debug: bool) -> None:
    """Browse a chat export archive and export selected channels' message IDs.

    Keys: Up/Down move, Space toggles a channel, ':' opens the command line
    (export, exit, quit), Escape leaves.
    """
    _configure_logging(debug)

    try:
        archive = ChannelArchive(archive_dir)
        channels = archive.load_channels()
    except ArchiveError as e:
        click.echo(f"Error: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error loading archive: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    from .tui import BrowserExit, run_channel_browser

    result = run_channel_browser(channels, archive, output)
    if result is BrowserExit.QUIT:
        click.echo("Exiting...")
        sys.exit(0)
    click.echo("Exited the application")


if __name__ == "__main__":
    main()
