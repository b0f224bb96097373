"""Reading the transcript whisper leaves behind."""

import asyncio
import logging
from pathlib import Path

from .errors import OutputMissing, StorageFailure

logger = logging.getLogger(__name__)


def output_path_for(output_dir: Path, base_name: str, output_format: str) -> Path:
    """Path whisper uses for ``<base_name>.<output_format>`` in output_dir."""
    return output_dir / f"{base_name}.{output_format}"


async def load_result(output_dir: Path, base_name: str, output_format: str) -> str:
    """Read a transcript file and return its trimmed text.

    Raises:
        OutputMissing: If whisper did not produce the file.
        StorageFailure: If the file exists but can't be read.
    """
    path = output_path_for(output_dir, base_name, output_format)
    if not path.exists():
        raise OutputMissing(path)

    try:
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except OSError as e:
        raise StorageFailure(path, e) from e

    logger.debug(f"Loaded {len(text)} chars from {path}")
    return text.strip()
