"""
Status record domain model.

One StatusRecord describes the lifecycle of one job instance. Records are
immutable: every transition returns a new record, so field co-presence and
timestamp ordering are enforced here rather than by each caller.

Dependencies: pydantic
System role: Persisted job status snapshot
"""

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jobstatus.core.exceptions import InvalidStatusTransitionError


class JobStatus(str, enum.Enum):
    """
    Tracked job lifecycle states.

    QUEUED: Enqueued, awaiting worker pickup
    WORKING: A worker is executing the job body
    COMPLETED: Job body returned normally
    FAILED: Job body raised, or the runtime lost the job
    ABORTED: Job stopped at a checkpoint after an abort request
    """

    QUEUED = "queued"
    WORKING = "working"
    COMPLETED = "completed"
    FAILED = "failed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


ACTIVE_STATUSES = frozenset({JobStatus.QUEUED, JobStatus.WORKING})
TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.ABORTED})

_ALLOWED_TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.QUEUED: frozenset({JobStatus.WORKING, JobStatus.FAILED}),
    JobStatus.WORKING: frozenset({JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.ABORTED}),
}

PART_FIELDS = ("part_weight", "part_started", "part_expected_seconds", "part_base_progress")
_CLEARED_PART = dict.fromkeys(PART_FIELDS)


def clamp_progress(value: float) -> float:
    """Clamp a progress value into [0, 1]."""
    return min(max(float(value), 0.0), 1.0)


class StatusRecord(BaseModel):
    """
    Status snapshot of a single job.

    Attributes:
        job_id: Runtime-assigned job identifier (immutable)
        job_class: Registered job class name
        status: Current lifecycle state
        progress: Overall progress in [0, 1]
        message: Last human-readable message
        error: Error description, only for FAILED
        args: Job arguments captured at enqueue time
        time_queued: Epoch seconds when the job was enqueued
        time_started: Epoch seconds when a worker picked the job up
        time_ended: Epoch seconds when the job reached a terminal state
        part_weight: Weight of the active time-driven part
        part_started: Epoch seconds when the active time-driven part started
        part_expected_seconds: Expected duration of the active time-driven part
        part_base_progress: Progress accumulated before the active part
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    job_id: str
    job_class: str = ""
    status: JobStatus = JobStatus.QUEUED
    progress: float = 0.0
    message: str | None = None
    error: str | None = None
    args: dict[str, Any] = Field(default_factory=dict)

    time_queued: float | None = None
    time_started: float | None = None
    time_ended: float | None = None

    part_weight: float | None = None
    part_started: float | None = None
    part_expected_seconds: float | None = None
    part_base_progress: float | None = None

    @field_validator("progress")
    @classmethod
    def _clamp(cls, value: float) -> float:
        return clamp_progress(value)

    @model_validator(mode="after")
    def _check_part_fields(self) -> "StatusRecord":
        present = [getattr(self, name) is not None for name in PART_FIELDS]
        if any(present) and not all(present):
            raise ValueError("part fields must be set together or not at all")
        return self

    # ── Construction ──────────────────────────────────────────────────

    @classmethod
    def queued(
        cls,
        job_id: str,
        job_class: str,
        args: dict[str, Any] | None,
        now: float,
    ) -> "StatusRecord":
        """Build the minimal record written by the enqueue hook."""
        return cls(
            job_id=job_id,
            job_class=job_class,
            status=JobStatus.QUEUED,
            args=dict(args or {}),
            time_queued=now,
        )

    # ── Queries ───────────────────────────────────────────────────────

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def has_active_part(self) -> bool:
        return self.part_started is not None

    # ── Updates ───────────────────────────────────────────────────────

    def _update(self, **changes: Any) -> "StatusRecord":
        # model_copy skips validation; rebuild so clamping and co-presence still apply
        return type(self).model_validate({**self.model_dump(), **changes})

    def _transition(self, target: JobStatus, **changes: Any) -> "StatusRecord":
        if target not in _ALLOWED_TRANSITIONS.get(self.status, frozenset()):
            raise InvalidStatusTransitionError(self.job_id, self.status.value, target.value)
        return self._update(status=target, **changes)

    def _ended_at(self, now: float) -> float:
        return max(now, self.time_started or self.time_queued or now)

    def start(self, now: float) -> "StatusRecord":
        """QUEUED -> WORKING."""
        return self._transition(
            JobStatus.WORKING,
            time_started=max(now, self.time_queued or now),
        )

    def complete(self, now: float) -> "StatusRecord":
        """WORKING -> COMPLETED with full progress."""
        return self._transition(
            JobStatus.COMPLETED,
            progress=1.0,
            time_ended=self._ended_at(now),
            **_CLEARED_PART,
        )

    def abort(self, now: float) -> "StatusRecord":
        """WORKING -> ABORTED."""
        return self._transition(
            JobStatus.ABORTED,
            time_ended=self._ended_at(now),
            **_CLEARED_PART,
        )

    def fail(self, error: str, now: float | None = None) -> "StatusRecord":
        """
        Move to FAILED.

        Args:
            error: Error description
            now: End timestamp; None leaves time_ended untouched (used when
                the time of death is unknown)
        """
        changes: dict[str, Any] = {"error": error, **_CLEARED_PART}
        if now is not None:
            changes["time_ended"] = self._ended_at(now)
        return self._transition(JobStatus.FAILED, **changes)

    def with_progress(self, progress: float) -> "StatusRecord":
        return self._update(progress=progress)

    def with_message(self, message: str | None) -> "StatusRecord":
        return self._update(message=message)

    def with_part(
        self,
        weight: float,
        started: float,
        expected_seconds: float,
        base_progress: float,
    ) -> "StatusRecord":
        """Record an active time-driven part."""
        return self._update(
            part_weight=weight,
            part_started=started,
            part_expected_seconds=expected_seconds,
            part_base_progress=base_progress,
        )

    def without_part(self) -> "StatusRecord":
        if not self.has_active_part:
            return self
        return self._update(**_CLEARED_PART)

    # ── Serialization ─────────────────────────────────────────────────

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, payload: str | bytes) -> "StatusRecord":
        return cls.model_validate_json(payload)
