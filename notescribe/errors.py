"""Error types raised by the transcription pipeline."""

from pathlib import Path
from typing import Optional


class TranscriptionError(Exception):
    """Base class for all transcription failures."""


class EngineUnavailable(TranscriptionError):
    """The configured engine is missing or did not answer the probe."""

    def __init__(self, engine_path: str):
        self.engine_path = engine_path
        super().__init__(
            f"Whisper engine not found or not responding: {engine_path}"
        )


class EngineExecutionFailed(TranscriptionError):
    """The engine could not be spawned, exited non-zero or timed out."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Whisper execution failed: {cause}")


class OutputMissing(TranscriptionError):
    """The engine finished but the expected output file is absent."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Transcription file not found: {path}")


class StorageFailure(TranscriptionError):
    """Reading or writing a working file failed."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"Storage operation failed for {path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class InvalidCursor(TranscriptionError, ValueError):
    """A cursor position lies outside the document."""

    def __init__(self, line: int, ch: int, reason: str):
        self.line = line
        self.ch = ch
        super().__init__(f"Invalid cursor position {line}:{ch}: {reason}")
