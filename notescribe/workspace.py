"""Scratch directory handling for transcription jobs."""

import asyncio
import logging
from pathlib import Path

from .errors import StorageFailure
from .loader import output_path_for

logger = logging.getLogger(__name__)

OUTPUT_DIR_NAME = "output"


class TempWorkspace:
    """Stages job inputs and collects whisper outputs under a shared root.

    The root and its output directory are shared by all jobs and are never
    removed; each job only deletes the files it created.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.output_dir = self.root / OUTPUT_DIR_NAME

    def ensure_root(self) -> Path:
        """Create the scratch root if needed (idempotent)."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageFailure(self.root, e) from e
        return self.root

    def ensure_output_dir(self) -> Path:
        """Create the output directory if needed (idempotent)."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageFailure(self.output_dir, e) from e
        return self.output_dir

    def staged_path(self, file_name: str, job_id: str) -> Path:
        # Only the base name is used so a job can't write outside the root
        return self.root / f"{job_id}-{Path(file_name).name}"

    async def stage_audio(self, audio: bytes, file_name: str, job_id: str) -> Path:
        """Write the audio buffer into the scratch root.

        Args:
            audio: Raw audio bytes.
            file_name: Desired file name, extension included.
            job_id: Unique job identifier, prefixed to the file name.

        Returns:
            Path of the staged file.

        Raises:
            StorageFailure: If the file can't be written.
        """
        self.ensure_root()
        path = self.staged_path(file_name, job_id)
        try:
            await asyncio.to_thread(path.write_bytes, audio)
        except OSError as e:
            raise StorageFailure(path, e) from e

        logger.debug(f"Staged {len(audio)} bytes at {path}")
        return path

    def expected_output_path(self, staged_path: Path, output_format: str) -> Path:
        """Where whisper writes the result for a staged input."""
        return output_path_for(self.output_dir, staged_path.stem, output_format)

    def cleanup(self, *paths: Path) -> None:
        """Remove job files, logging (not raising) on failure."""
        for path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Failed to cleanup file {path}: {e}")
