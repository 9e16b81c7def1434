"""
Job runtime interface.

What the tracking subsystem needs from the queue runtime: a way to enqueue
a tracked job and a live view of a job's state.

Dependencies: enum, typing (stdlib)
System role: Runtime abstraction consumed by JobService and the reconciler
"""

import enum
from typing import Any, Callable, Protocol


class RuntimeJobState(str, enum.Enum):
    """
    Runtime's own view of a job.

    QUEUED: Known to the runtime, not started
    WORKING: Picked up by a worker
    FAILED: Runtime recorded a failure (including lost workers)
    UNKNOWN: Runtime has no live knowledge of the job
    """

    QUEUED = "queued"
    WORKING = "working"
    FAILED = "failed"
    UNKNOWN = "unknown"


BeforeEnqueueListener = Callable[[str, str, dict[str, Any]], Any]


class JobRuntime(Protocol):
    """Queue runtime collaborator."""

    def add_before_enqueue_listener(self, listener: BeforeEnqueueListener) -> None:
        """Register a callback(job_id, job_class, args) run before a job is published."""
        ...

    def enqueue(self, queue_name: str, job_class: str, args: dict[str, Any]) -> str:
        """Submit a tracked job and return its runtime-assigned id."""
        ...

    def query_job_state(self, job_id: str) -> RuntimeJobState:
        """Return the runtime's live state for a job."""
        ...
