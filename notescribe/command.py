"""Command line construction for the whisper CLI."""

from pathlib import Path
from typing import List

from .config import TranscriptionConfig

AUTO_LANGUAGE = "auto"


def build_command(
    config: TranscriptionConfig, input_path: Path, output_dir: Path
) -> List[str]:
    """Build the argument list for one whisper invocation.

    The result is passed to the process launcher as discrete arguments, so
    tokens such as ``--fp16=False`` in ``extra_args`` reach whisper unchanged.
    Extra arguments come last and can override earlier flags.

    Args:
        config: Engine settings snapshot for the job.
        input_path: Staged audio file.
        output_dir: Directory whisper writes its result into.

    Returns:
        Ordered list of arguments, executable first.
    """
    command = [config.engine_path, str(input_path), "--model", config.model_size]

    if config.language and config.language != AUTO_LANGUAGE:
        command.extend(["--language", config.language])

    command.extend(["--output_format", config.output_format])
    command.extend(["--output_dir", str(output_dir)])
    command.extend(config.extra_args)

    return command
