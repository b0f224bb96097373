"""Installation check for the whisper engine."""

import asyncio
import logging

logger = logging.getLogger(__name__)

PROBE_ARG = "--help"
PROBE_MARKER = "whisper"
DEFAULT_PROBE_TIMEOUT = 30.0


async def check_installed(
    engine_path: str, timeout: float = DEFAULT_PROBE_TIMEOUT
) -> bool:
    """Check that the engine runs and describes itself as whisper.

    Never raises: a missing or broken engine is reported as False.

    Args:
        engine_path: Executable name or path.
        timeout: Maximum time to wait for the help output.

    Returns:
        True if the engine exited cleanly and its help text mentions whisper.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            engine_path,
            PROBE_ARG,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        # ValueError: engine path with an embedded NUL byte
        logger.warning(f"Whisper installation check failed: {e}")
        return False

    try:
        stdout, _ = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Whisper installation check timed out after {timeout}s")
        try:
            process.kill()
            await process.wait()
        except ProcessLookupError:
            pass
        return False

    if process.returncode != 0:
        logger.warning(
            f"Whisper installation check failed: {engine_path} {PROBE_ARG} "
            f"exited with code {process.returncode}"
        )
        return False

    help_text = stdout.decode("utf-8", errors="replace") if stdout else ""
    if PROBE_MARKER not in help_text.lower():
        logger.warning(f"Unexpected help output from {engine_path}, not whisper?")
        return False

    logger.debug(f"Whisper found at {engine_path}")
    return True
