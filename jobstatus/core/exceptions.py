"""
Exception hierarchy for job status tracking.

Provides layered exception structure for store, lifecycle and job errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the subsystem
"""

from typing import Any


class JobStatusException(Exception):
    """Base exception for all job status tracking errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TransientStoreError(JobStatusException):
    """Raised when the key-value store is unreachable or times out."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Store operation that failed (get, set, rpush, lrange)
            key: Store key involved
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if key:
            details["key"] = key
        super().__init__(message, details)


class StatusRecordDecodeError(JobStatusException):
    """Raised when a stored status payload cannot be decoded."""

    def __init__(self, job_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["job_id"] = job_id
        super().__init__(f"Status record for job {job_id} is not decodable", details)


class InvalidStatusTransitionError(JobStatusException):
    """Raised when a status change would leave a terminal state or move backwards."""

    def __init__(self, job_id: str, current: str, requested: str) -> None:
        super().__init__(
            f"Job {job_id} cannot move from {current} to {requested}",
            {"job_id": job_id, "current": current, "requested": requested},
        )


class UnknownJobClassError(JobStatusException):
    """Raised when no job implementation is registered under a class name."""

    def __init__(self, job_class: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["job_class"] = job_class
        super().__init__(f"Job class not registered: {job_class}", details)


class JobAborted(JobStatusException):
    """
    Cooperative cancellation signal.

    Raised at a checkpoint once an abort has been requested. Not a failure
    of the job logic: the lifecycle controller records ABORTED and re-raises
    it so the runtime's own bookkeeping marks the task as not completed.
    """

    def __init__(self, job_id: str, reason: str | None = None) -> None:
        """
        Initialize abort signal.

        Args:
            job_id: Job being aborted
            reason: Optional explanation (e.g. who requested the abort)
        """
        self.job_id = job_id
        self.reason = reason
        details = {"job_id": job_id}
        if reason:
            details["reason"] = reason
        super().__init__(f"Job {job_id} aborted", details)

    def __reduce__(self):
        return (type(self), (self.job_id, self.reason))


class JobBodyError(JobStatusException):
    """Raised for a job body that returned a Failed result instead of raising."""

    def __init__(self, job_id: str, error: str) -> None:
        self.job_id = job_id
        self.error = error
        super().__init__(f"Job {job_id} failed: {error}", {"job_id": job_id})

    def __reduce__(self):
        return (type(self), (self.job_id, self.error))
