"""Local whisper transcription pipeline."""

import logging
import uuid
from pathlib import Path
from typing import List, Optional

from .command import build_command
from .config import TranscriptionConfig
from .errors import EngineUnavailable
from .loader import load_result
from .probe import DEFAULT_PROBE_TIMEOUT, check_installed
from .runner import run_command
from .state import JobStateEnum, JobStateManager
from .workspace import TempWorkspace

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 900.0


class TranscriptionResult:
    """Transcript of a finished job."""

    def __init__(self, text: str, job_id: str, file_name: str):
        self.text = text
        self.job_id = job_id
        self.file_name = file_name

    def __str__(self) -> str:
        return self.text


def new_job_id() -> str:
    return uuid.uuid4().hex[:12]


class TranscriptionPipeline:
    """Runs one whisper job per call: probe, stage, invoke, load, clean up."""

    def __init__(
        self,
        config: TranscriptionConfig,
        workspace: TempWorkspace,
        timeout: float = DEFAULT_TIMEOUT,
        state_manager: Optional[JobStateManager] = None,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
    ):
        """Initialize the pipeline.

        Args:
            config: Engine settings used for submitted jobs.
            workspace: Scratch directory shared by all jobs.
            timeout: Maximum time to wait for one whisper run.
            state_manager: Optional state manager receiving job transitions.
            probe_timeout: Maximum time to wait for the installation check.
        """
        self._config = config
        self.workspace = workspace
        self.timeout = timeout
        self.probe_timeout = probe_timeout
        self.state_manager = state_manager or JobStateManager()

        self.workspace.ensure_root()

    @property
    def config(self) -> TranscriptionConfig:
        return self._config

    def update_config(self, config: TranscriptionConfig) -> None:
        """Replace the engine settings for jobs submitted from now on."""
        logger.info(
            f"Whisper config updated (model: {config.model_size}, "
            f"language: {config.language}, engine: {config.engine_path})"
        )
        self._config = config

    async def check_installation(self) -> bool:
        """Check the configured engine without running a job."""
        return await check_installed(self._config.engine_path, self.probe_timeout)

    async def process_audio(self, audio: bytes, file_name: str) -> TranscriptionResult:
        """Transcribe an audio buffer.

        Args:
            audio: Raw audio bytes (any format whisper can read).
            file_name: Name of the recording, extension included.

        Returns:
            TranscriptionResult with the trimmed transcript.

        Raises:
            EngineUnavailable: If the installation check fails; nothing is written.
            EngineExecutionFailed: If whisper fails to run, exits non-zero or times out.
            OutputMissing: If whisper did not write the expected output file.
            StorageFailure: If the audio can't be staged or the output can't be read.
        """
        # Snapshot so a config update can't affect this job
        config = self._config
        job_id = new_job_id()
        job = self.state_manager.new_job(job_id)

        logger.debug(f"Job {job_id}: {len(audio) / 1000} KB of audio for {file_name}")

        job.set_state(JobStateEnum.PROBING)
        if not await check_installed(config.engine_path, self.probe_timeout):
            error = EngineUnavailable(config.engine_path)
            job.set_state(JobStateEnum.UNAVAILABLE, error=str(error))
            job.set_state(JobStateEnum.DONE)
            logger.error(f"Job {job_id}: {error}")
            raise error

        job.set_state(JobStateEnum.STAGING)
        job_files: List[Path] = []
        try:
            try:
                output_dir = self.workspace.ensure_output_dir()
                # Registered before writing so a partial write is still removed
                staged_path = self.workspace.staged_path(file_name, job_id)
                job_files.append(staged_path)
                job_files.append(
                    self.workspace.expected_output_path(staged_path, config.output_format)
                )
                await self.workspace.stage_audio(audio, file_name, job_id)

                job.set_state(JobStateEnum.INVOKING)
                command = build_command(config, staged_path, output_dir)
                await run_command(command, self.timeout)

                job.set_state(JobStateEnum.LOADING)
                text = await load_result(
                    output_dir, staged_path.stem, config.output_format
                )
            except BaseException as e:
                job.set_state(JobStateEnum.FAILED, error=str(e) or type(e).__name__)
                logger.error(f"Job {job_id}: local Whisper processing failed: {e}")
                raise

            job.set_state(JobStateEnum.SUCCEEDED)
            logger.info(f"Job {job_id}: transcribed {file_name} ({len(text)} chars)")
            return TranscriptionResult(text=text, job_id=job_id, file_name=file_name)

        finally:
            job.set_state(JobStateEnum.CLEANING_UP)
            self.workspace.cleanup(*job_files)
            job.set_state(JobStateEnum.DONE)
