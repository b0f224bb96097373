"""Tests for the installation check."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from notescribe.probe import check_installed

HELP_TEXT = b"usage: whisper [-h] [--model MODEL] audio [audio ...]"


def make_process(returncode=0, stdout=HELP_TEXT):
    """Create a mock asyncio process."""
    process = AsyncMock()
    process.communicate = AsyncMock(return_value=(stdout, b""))
    process.returncode = returncode
    process.kill = MagicMock()
    process.wait = AsyncMock()
    return process


@pytest.mark.asyncio
async def test_check_installed_true():
    """Test a working whisper install is detected."""
    with patch(
        "asyncio.create_subprocess_exec", return_value=make_process()
    ) as mock_create:
        assert await check_installed("whisper") is True

    assert mock_create.call_args.args == ("whisper", "--help")


@pytest.mark.asyncio
async def test_check_installed_missing_binary():
    """Test a missing binary is reported as False."""
    with patch("asyncio.create_subprocess_exec", side_effect=FileNotFoundError()):
        assert await check_installed("/nope/whisper") is False


@pytest.mark.asyncio
async def test_check_installed_permission_denied():
    """Test a non-executable binary is reported as False."""
    with patch("asyncio.create_subprocess_exec", side_effect=PermissionError()):
        assert await check_installed("whisper") is False


@pytest.mark.asyncio
async def test_check_installed_nonzero_exit():
    """Test a failing help command is reported as False."""
    with patch(
        "asyncio.create_subprocess_exec", return_value=make_process(returncode=1)
    ):
        assert await check_installed("whisper") is False


@pytest.mark.asyncio
async def test_check_installed_marker_missing():
    """Test a different program is not mistaken for whisper."""
    with patch(
        "asyncio.create_subprocess_exec",
        return_value=make_process(stdout=b"usage: ls [OPTION]... [FILE]..."),
    ):
        assert await check_installed("ls") is False


@pytest.mark.asyncio
async def test_check_installed_timeout():
    """Test a hanging help command is killed and reported as False."""
    process = make_process()
    process.communicate = AsyncMock(side_effect=asyncio.TimeoutError())

    with patch("asyncio.create_subprocess_exec", return_value=process):
        assert await check_installed("whisper", timeout=0.1) is False

    process.kill.assert_called_once()


@pytest.mark.asyncio
async def test_check_installed_invalid_path():
    """Test an engine path the OS rejects is reported as False."""
    with patch(
        "asyncio.create_subprocess_exec",
        side_effect=ValueError("embedded null byte"),
    ):
        assert await check_installed("whis\x00per") is False
