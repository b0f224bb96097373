"""Tests for job state tracking."""

from unittest.mock import Mock

import pytest

from notescribe.state import JobStateEnum, JobStateManager


@pytest.fixture
def manager():
    """Create a state manager."""
    return JobStateManager()


def test_new_job_starts_idle(manager):
    """Test jobs start in IDLE."""
    job = manager.new_job("job1")

    assert job.current_state == JobStateEnum.IDLE
    assert job.get_status() == ("Idle", None)


def test_observers_notified(manager):
    """Test observers receive every transition."""
    observer = Mock()
    manager.add_observer(observer)
    job = manager.new_job("job1")

    job.set_state(JobStateEnum.PROBING)
    job.set_state(JobStateEnum.UNAVAILABLE, error="not found")

    observer.assert_any_call("job1", JobStateEnum.PROBING, None)
    observer.assert_any_call("job1", JobStateEnum.UNAVAILABLE, "not found")
    assert job.last_error == "not found"


def test_invalid_transition(manager):
    """Test skipping the probe is rejected."""
    job = manager.new_job("job1")

    with pytest.raises(ValueError):
        job.set_state(JobStateEnum.INVOKING)


def test_invalid_state_type(manager):
    """Test non-enum states are rejected."""
    job = manager.new_job("job1")

    with pytest.raises(TypeError):
        job.set_state("Probing")


def test_observer_error_does_not_break_state(manager):
    """Test a failing observer doesn't stop the transition."""
    manager.add_observer(Mock(side_effect=RuntimeError("boom")))
    job = manager.new_job("job1")

    job.set_state(JobStateEnum.PROBING)

    assert job.current_state == JobStateEnum.PROBING
