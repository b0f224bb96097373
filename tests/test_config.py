"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from notescribe.config import (
    AppConfig,
    DaemonConfig,
    TranscriptionConfig,
    WhisperConfig,
    get_default_config_path,
    load_config,
)


def test_defaults():
    """Test default values match the documented settings."""
    config = AppConfig()

    assert config.whisper.engine_path == "whisper"
    assert config.whisper.model_size == "base"
    assert config.whisper.language == "auto"
    assert config.whisper.output_format == "txt"
    assert config.whisper.extra_args == []
    assert config.notes.save_audio_file is True
    assert config.notes.create_new_file_after_recording is True
    assert config.daemon.debug_mode is False
    assert config.workspace.computed_root.name == ".whisper-temp"


def test_load_missing_file_returns_defaults(tmp_path):
    """Test a missing config file gives the defaults."""
    config = load_config(tmp_path / "missing.toml")

    assert config == AppConfig()


def test_load_config_file(tmp_path):
    """Test values are read from TOML."""
    path = tmp_path / "config.toml"
    path.write_text(
        """
[whisper]
engine_path = "/usr/local/bin/whisper"
model_size = "small"
language = "de"
extra_args = "--fp16=False, --device=cpu"

[notes]
vault_path = "/notes"
save_audio_file = false
create_new_file_after_recording_path = "/Inbox/"

[daemon]
log_level = "debug"
"""
    )

    config = load_config(path)

    assert config.whisper.engine_path == "/usr/local/bin/whisper"
    assert config.whisper.model_size == "small"
    assert config.whisper.extra_args == ["--fp16=False", "--device=cpu"]
    assert config.notes.vault_path == Path("/notes")
    assert config.notes.save_audio_file is False
    assert config.notes.create_new_file_after_recording_path == "Inbox"
    assert config.daemon.log_level == "DEBUG"


def test_load_invalid_toml(tmp_path):
    """Test malformed TOML raises ValueError."""
    path = tmp_path / "config.toml"
    path.write_text("[whisper\nmodel_size = ")

    with pytest.raises(ValueError, match="Error decoding TOML"):
        load_config(path)


def test_load_invalid_model_size(tmp_path):
    """Test unknown model sizes are rejected."""
    path = tmp_path / "config.toml"
    path.write_text('[whisper]\nmodel_size = "huge"\n')

    with pytest.raises(ValueError, match="Configuration validation failed"):
        load_config(path)


def test_empty_language_means_auto():
    """Test an empty language falls back to auto-detect."""
    assert WhisperConfig(language="  ").language == "auto"


def test_empty_engine_path_rejected():
    """Test the engine path can't be empty."""
    with pytest.raises(ValidationError):
        WhisperConfig(engine_path="")


def test_invalid_log_level():
    """Test unknown log levels are rejected."""
    with pytest.raises(ValidationError):
        DaemonConfig(log_level="LOUD")


def test_debug_mode_forces_debug_level():
    """Test debug mode overrides the configured level."""
    assert DaemonConfig(log_level="ERROR", debug_mode=True).effective_log_level == "DEBUG"
    assert DaemonConfig(log_level="ERROR").effective_log_level == "ERROR"


def test_to_transcription_config():
    """Test the job snapshot is built from the whisper section."""
    snapshot = WhisperConfig(
        model_size="medium", extra_args=["--fp16=False"]
    ).to_transcription_config()

    assert snapshot == TranscriptionConfig(
        model_size="medium", extra_args=("--fp16=False",)
    )


def test_transcription_config_is_frozen():
    """Test job snapshots can't be mutated."""
    snapshot = TranscriptionConfig()

    with pytest.raises(ValidationError):
        snapshot.language = "en"


def test_default_config_path_xdg(monkeypatch, tmp_path):
    """Test XDG_CONFIG_HOME is honoured."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert get_default_config_path() == tmp_path / "notescribe" / "config.toml"
