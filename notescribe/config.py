"""Configuration handling for notescribe."""

import os
import tomllib
from pathlib import Path
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

ModelSize = Literal["tiny", "base", "small", "medium", "large"]

WORKSPACE_DIR_NAME = ".whisper-temp"


def get_default_config_path() -> Path:
    """Get the default config file path following XDG spec."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base_dir = Path(xdg_config)
    else:
        base_dir = Path.home() / ".config"

    return base_dir / "notescribe" / "config.toml"


def get_default_log_path() -> Path:
    """Get the default log file path following XDG spec."""
    xdg_state = os.environ.get("XDG_STATE_HOME")
    if xdg_state:
        base_dir = Path(xdg_state)
    else:
        base_dir = Path.home() / ".local" / "state"

    log_dir = base_dir / "notescribe"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "notescribe.log"


def get_default_workspace_root() -> Path:
    """Scratch directory used when none is configured."""
    return Path.cwd() / WORKSPACE_DIR_NAME


class TranscriptionConfig(BaseModel):
    """Immutable engine settings snapshot used for a single job."""

    model_config = ConfigDict(frozen=True)

    engine_path: str = "whisper"
    model_size: ModelSize = "base"
    language: str = "auto"
    output_format: str = "txt"
    extra_args: Tuple[str, ...] = ()


class WhisperConfig(BaseModel):
    """Local Whisper engine configuration."""

    engine_path: str = Field(
        default="whisper", description="Path to the whisper executable."
    )
    model_size: ModelSize = Field(
        default="base", description="Model size (tiny, base, small, medium, large)."
    )
    language: str = Field(
        default="auto", description="Language code, or 'auto' to let whisper detect."
    )
    output_format: str = Field(
        default="txt", description="Output format passed to whisper (txt, srt, vtt...)."
    )
    extra_args: List[str] = Field(
        default_factory=list,
        description="Additional arguments appended verbatim to the command line.",
    )
    timeout_s: float = Field(
        default=900.0, gt=0, description="Maximum time to wait for whisper (seconds)."
    )

    @field_validator("engine_path", "output_format")
    @classmethod
    def check_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        v = v.strip()
        return v or "auto"

    @field_validator("extra_args", mode="before")
    @classmethod
    def split_extra_args(cls, v):
        # Settings files may carry the comma-separated form, e.g. "--fp16=False, --device=cpu"
        if isinstance(v, str):
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v

    def to_transcription_config(self) -> TranscriptionConfig:
        return TranscriptionConfig(
            engine_path=self.engine_path,
            model_size=self.model_size,
            language=self.language,
            output_format=self.output_format,
            extra_args=tuple(self.extra_args),
        )


class NotesConfig(BaseModel):
    """Where transcripts and recordings end up."""

    vault_path: Path = Field(
        default_factory=Path.cwd, description="Root directory of the notes vault."
    )
    save_audio_file: bool = Field(
        default=True, description="Keep the recording inside the vault."
    )
    save_audio_file_path: str = Field(
        default="", description="Vault folder for recordings (empty = vault root)."
    )
    create_new_file_after_recording: bool = Field(
        default=True, description="Always put the transcript in a new note."
    )
    create_new_file_after_recording_path: str = Field(
        default="", description="Vault folder for new notes (empty = vault root)."
    )

    @field_validator("save_audio_file_path", "create_new_file_after_recording_path")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        return v.strip().strip("/")


class WorkspaceConfig(BaseModel):
    """Scratch directory configuration."""

    root: Optional[Path] = Field(
        default=None, description="Scratch directory (default: ./.whisper-temp)."
    )

    @property
    def computed_root(self) -> Path:
        return self.root or get_default_workspace_root()


class DaemonConfig(BaseModel):
    """Runtime configuration."""

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    log_file: Optional[Path] = Field(
        default=None, description="Optional custom log file path."
    )
    debug_mode: bool = Field(
        default=False, description="Verbose diagnostics and extra notices."
    )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in allowed_levels:
            raise ValueError(f"Invalid log level. Choose from {allowed_levels}")
        return upper_v

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level

    @property
    def computed_log_file(self) -> Path:
        return self.log_file or get_default_log_path()


class AppConfig(BaseModel):
    """Root configuration."""

    whisper: WhisperConfig = Field(default_factory=WhisperConfig)
    notes: NotesConfig = Field(default_factory=NotesConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    daemon: DaemonConfig = Field(default_factory=DaemonConfig)


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load and validate configuration.

    If path is not provided, looks for config in the standard location.
    If no config file is found, returns default configuration.

    Args:
        path: Optional path to config file.

    Returns:
        Validated AppConfig instance.

    Raises:
        ValueError: If config file exists but has invalid format/content.
        OSError: If config file exists but can't be read.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        return AppConfig()  # Use defaults

    try:
        with open(path, "rb") as f:
            config_data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Error decoding TOML file: {path}\n{e}") from e
    except OSError as e:
        raise OSError(f"Error reading file: {path}\n{e}") from e

    try:
        return AppConfig(**config_data)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
