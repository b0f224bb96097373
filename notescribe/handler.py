"""Recording handler: transcribe a recording and place the text in the vault."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .config import AppConfig
from .errors import EngineUnavailable, InvalidCursor, StorageFailure, TranscriptionError
from .placement import (
    CursorPosition,
    TextEditor,
    Vault,
    apply_placement,
    audio_path_for,
    decide_placement,
    note_path_for,
)
from .pipeline import TranscriptionPipeline
from .state import JobStateManager
from .workspace import TempWorkspace

logger = logging.getLogger(__name__)

Notifier = Callable[[str], Any]

UNAVAILABLE_MESSAGE = (
    "Whisper is not installed or not found. "
    "Please check your Whisper installation and path in settings."
)


@dataclass
class HandlerOutcome:
    """What happened to one recording."""

    success: bool
    text: Optional[str] = None
    placed_at: Optional[Union[Path, CursorPosition]] = None
    audio_path: Optional[Path] = None
    error: Optional[TranscriptionError] = None


class RecordingHandler:
    """Runs recordings through the pipeline and routes the transcript."""

    def __init__(
        self,
        config: AppConfig,
        notify: Optional[Notifier] = None,
        state_manager: Optional[JobStateManager] = None,
    ):
        """Initialize the handler.

        Args:
            config: Application configuration.
            notify: Callback receiving user-facing messages.
            state_manager: Optional state manager for job transitions.
        """
        self.config = config
        self.notify: Notifier = notify or (lambda message: None)
        self.vault = Vault(config.notes.vault_path)
        self.pipeline = TranscriptionPipeline(
            config.whisper.to_transcription_config(),
            TempWorkspace(config.workspace.computed_root),
            timeout=config.whisper.timeout_s,
            state_manager=state_manager,
        )

    def update_config(self, config: AppConfig) -> None:
        """Apply new settings; jobs already running keep their snapshot."""
        self.config = config
        self.vault = Vault(config.notes.vault_path)
        self.pipeline.update_config(config.whisper.to_transcription_config())
        self.pipeline.timeout = config.whisper.timeout_s

    async def _save_audio(self, audio: bytes, audio_link: str) -> Optional[Path]:
        try:
            path = await asyncio.to_thread(self.vault.write_binary, audio_link, audio)
        except StorageFailure as e:
            logger.error(f"Error saving audio file: {e}")
            self.notify(f"Error saving audio file: {e}")
            return None
        self.notify("Audio saved successfully.")
        return path

    async def send_audio_data(
        self, audio: bytes, file_name: str, editor: Optional[TextEditor] = None
    ) -> HandlerOutcome:
        """Transcribe a recording and place the transcript.

        Args:
            audio: Recorded audio bytes.
            file_name: Recording file name, extension included.
            editor: Active editable document, if any.

        Returns:
            HandlerOutcome describing the result; errors are reported, not raised.
        """
        notes = self.config.notes
        debug_mode = self.config.daemon.debug_mode

        if debug_mode:
            self.notify(f"Processing audio data size: {len(audio) / 1000} KB")
            self.notify(f"Processing audio data locally: {file_name}")

        try:
            result = await self.pipeline.process_audio(audio, file_name)
        except EngineUnavailable as e:
            self.notify(UNAVAILABLE_MESSAGE)
            return HandlerOutcome(success=False, error=e)
        except TranscriptionError as e:
            logger.error(f"Error transcribing audio: {e}")
            audio_path = None
            if notes.save_audio_file:
                audio_path = await self._save_audio(
                    audio, audio_path_for(file_name, notes.save_audio_file_path)
                )
            self.notify(f"Error transcribing audio: {e}")
            return HandlerOutcome(success=False, audio_path=audio_path, error=e)

        audio_link = None
        audio_path = None
        if notes.save_audio_file:
            audio_link = audio_path_for(file_name, notes.save_audio_file_path)
            audio_path = await self._save_audio(audio, audio_link)
            if audio_path is None:
                audio_link = None

        decision = decide_placement(
            create_new_file=notes.create_new_file_after_recording,
            has_active_document=editor is not None,
            note_path=note_path_for(file_name, notes.create_new_file_after_recording_path),
            cursor=editor.get_cursor() if editor is not None else None,
        )

        try:
            placed_at = apply_placement(
                decision, result.text, self.vault, editor=editor, audio_link=audio_link
            )
        except (StorageFailure, InvalidCursor) as e:
            logger.error(f"Error placing transcript: {e}")
            self.notify(f"Error placing transcript: {e}")
            return HandlerOutcome(
                success=False, text=result.text, audio_path=audio_path, error=e
            )

        self.notify("Audio transcribed successfully!")
        return HandlerOutcome(
            success=True, text=result.text, placed_at=placed_at, audio_path=audio_path
        )
