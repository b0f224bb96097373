"""State tracking for transcription jobs."""

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

StateObserver = Callable[[str, "JobStateEnum", Optional[str]], Any]


class JobStateEnum(str, Enum):
    """Stages a transcription job moves through."""

    IDLE = "Idle"
    PROBING = "Probing"
    UNAVAILABLE = "Unavailable"
    STAGING = "Staging"
    INVOKING = "Invoking"
    LOADING = "Loading"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CLEANING_UP = "CleaningUp"
    DONE = "Done"


# Allowed transitions; anything else is a programming error.
TRANSITIONS = {
    JobStateEnum.IDLE: {JobStateEnum.PROBING},
    JobStateEnum.PROBING: {JobStateEnum.UNAVAILABLE, JobStateEnum.STAGING},
    JobStateEnum.STAGING: {JobStateEnum.INVOKING, JobStateEnum.FAILED},
    JobStateEnum.INVOKING: {JobStateEnum.LOADING, JobStateEnum.FAILED},
    JobStateEnum.LOADING: {JobStateEnum.SUCCEEDED, JobStateEnum.FAILED},
    JobStateEnum.UNAVAILABLE: {JobStateEnum.DONE},
    JobStateEnum.SUCCEEDED: {JobStateEnum.CLEANING_UP},
    JobStateEnum.FAILED: {JobStateEnum.CLEANING_UP},
    JobStateEnum.CLEANING_UP: {JobStateEnum.DONE},
    JobStateEnum.DONE: set(),
}


class JobState:
    """State of a single job."""

    def __init__(self, job_id: str, manager: "JobStateManager"):
        self.job_id = job_id
        self._manager = manager
        self._state: JobStateEnum = JobStateEnum.IDLE
        self._last_error: Optional[str] = None
        self.history: List[JobStateEnum] = [JobStateEnum.IDLE]

    @property
    def current_state(self) -> JobStateEnum:
        return self._state

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def set_state(self, new_state: JobStateEnum, error: Optional[str] = None) -> None:
        """Move the job to a new state.

        Args:
            new_state: The state to move to.
            error: Optional error message, kept for FAILED/UNAVAILABLE.

        Raises:
            TypeError: If the provided state is not a JobStateEnum.
            ValueError: If the transition is not allowed.
        """
        if not isinstance(new_state, JobStateEnum):
            raise TypeError(f"State must be a JobStateEnum, got {type(new_state)}")

        if new_state not in TRANSITIONS[self._state]:
            raise ValueError(
                f"Invalid transition for job {self.job_id}: "
                f"{self._state.value} -> {new_state.value}"
            )

        if error is not None:
            self._last_error = error

        self._state = new_state
        self.history.append(new_state)
        self._manager._notify_observers(self.job_id, new_state, self._last_error)

    def get_status(self) -> Tuple[str, Optional[str]]:
        """Get the current state value and the last error message."""
        return self._state.value, self._last_error


class JobStateManager:
    """Creates job states and fans their transitions out to observers."""

    def __init__(self):
        self._observers: List[StateObserver] = []

    def add_observer(self, observer: StateObserver) -> None:
        """Add an observer callback for state changes.

        The callback receives the job id, the new state and optional error message.
        """
        self._observers.append(observer)

    def new_job(self, job_id: str) -> JobState:
        return JobState(job_id, self)

    def _notify_observers(
        self, job_id: str, state: JobStateEnum, error: Optional[str]
    ) -> None:
        for observer in self._observers:
            try:
                observer(job_id, state, error)
            except Exception:
                # Observer errors must not break state tracking
                logger.exception(f"State observer failed for job {job_id}")
