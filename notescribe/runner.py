"""Subprocess execution for the whisper engine."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import EngineExecutionFailed

logger = logging.getLogger(__name__)


@dataclass
class ProcessOutput:
    """Captured output of a finished process."""

    stdout: str
    stderr: str
    returncode: int


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace") if data else ""


async def run_command(args: Sequence[str], timeout: float) -> ProcessOutput:
    """Run a command without a shell and capture its output.

    Args:
        args: Executable followed by its arguments.
        timeout: Maximum time to wait for the process to finish.

    Returns:
        ProcessOutput with decoded stdout/stderr.

    Raises:
        EngineExecutionFailed: If the process cannot be spawned, exits with a
            non-zero code or exceeds the timeout.
    """
    command_str = " ".join(args)
    logger.info(f"Executing Whisper command: {command_str}")

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise EngineExecutionFailed(f"Command not found: {args[0]}") from e
    except PermissionError as e:
        raise EngineExecutionFailed(f"Permission denied executing: {args[0]}") from e
    except (OSError, ValueError) as e:
        raise EngineExecutionFailed(f"Error executing command: {e}") from e

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error(f"Command timed out after {timeout}s: {command_str}")
        try:
            process.kill()
            await process.wait()
        except ProcessLookupError:
            pass  # Process already finished
        raise EngineExecutionFailed("timeout") from e

    output = ProcessOutput(
        stdout=_decode(stdout), stderr=_decode(stderr), returncode=process.returncode
    )

    if output.returncode != 0:
        error_msg = (
            f"Command failed with code {output.returncode}:\n"
            f"Command: {command_str}\n"
            f"Stderr: {output.stderr}"
        )
        logger.error(error_msg)
        raise EngineExecutionFailed(error_msg)

    if output.stderr:
        logger.warning(f"Whisper stderr: {output.stderr}")
    if output.stdout:
        logger.debug(f"Whisper stdout: {output.stdout}")

    return output
