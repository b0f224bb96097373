"""Command line entry point for notescribe."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer

from .config import AppConfig, load_config
from .errors import InvalidCursor, StorageFailure
from .handler import RecordingHandler
from .logging_setup import setup_logging
from .placement import CursorPosition, FileEditor
from .probe import check_installed

logger = logging.getLogger(__name__)

__all__ = ["app", "run"]

app = typer.Typer(
    name="notescribe",
    help="Transcribe recordings with a local Whisper install and file them as notes.",
    add_completion=False,
)


def _load(config_path: Optional[Path]) -> AppConfig:
    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        raise typer.Exit(1)

    setup_logging(config.daemon.effective_log_level, config.daemon.computed_log_file)
    return config


@app.command("transcribe")
def transcribe(
    audio_file: Path = typer.Argument(..., help="Recorded audio file"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: XDG config dir)"
    ),
    note: Optional[Path] = typer.Option(
        None, "--note", "-n", help="Open note to insert the transcript into"
    ),
    line: Optional[int] = typer.Option(
        None, "--line", help="Cursor line in the note (default: end of file)"
    ),
    ch: int = typer.Option(0, "--ch", help="Cursor column in the note"),
    new_note: Optional[bool] = typer.Option(
        None,
        "--new-note/--insert",
        help="Override whether the transcript always goes into a new note",
    ),
) -> None:
    """Transcribe AUDIO_FILE and place the text in the vault."""
    config = _load(config_path)

    if new_note is not None:
        config.notes.create_new_file_after_recording = new_note

    try:
        audio = audio_file.read_bytes()
    except OSError as e:
        typer.echo(f"Error reading audio file: {e}", err=True)
        raise typer.Exit(1)

    editor = None
    if note is not None:
        cursor = CursorPosition(line=line, ch=ch) if line is not None else None
        try:
            editor = FileEditor.open(note, cursor)
        except (StorageFailure, InvalidCursor) as e:
            typer.echo(f"Error opening note: {e}", err=True)
            raise typer.Exit(1)

    handler = RecordingHandler(config, notify=typer.echo)
    outcome = asyncio.run(handler.send_audio_data(audio, audio_file.name, editor))

    if not outcome.success:
        if outcome.text:
            # Transcript exists but couldn't be placed
            typer.echo(outcome.text)
        raise typer.Exit(1)

    if editor is not None and isinstance(outcome.placed_at, CursorPosition):
        try:
            editor.save()
        except StorageFailure as e:
            typer.echo(f"Error saving note: {e}", err=True)
            raise typer.Exit(1)


@app.command("check")
def check(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (default: XDG config dir)"
    ),
) -> None:
    """Check that the configured Whisper engine is installed."""
    config = _load(config_path)
    engine_path = config.whisper.engine_path

    if not asyncio.run(check_installed(engine_path)):
        typer.echo(f"Whisper not found or not working: {engine_path}")
        raise typer.Exit(1)

    typer.echo(f"Whisper found: {engine_path}")


def run() -> NoReturn:
    """Entry point for the notescribe script."""
    try:
        app()
        sys.exit(0)
    except KeyboardInterrupt:
        sys.exit(130)
