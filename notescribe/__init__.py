"""Local Whisper transcription for a Markdown notes vault."""

from .errors import (
    EngineExecutionFailed,
    EngineUnavailable,
    OutputMissing,
    StorageFailure,
    TranscriptionError,
)
from .pipeline import TranscriptionPipeline, TranscriptionResult

__all__ = [
    "EngineExecutionFailed",
    "EngineUnavailable",
    "OutputMissing",
    "StorageFailure",
    "TranscriptionError",
    "TranscriptionPipeline",
    "TranscriptionResult",
]
