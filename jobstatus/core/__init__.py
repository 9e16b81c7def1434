"""
Core tracking logic.

Progress model, write throttle, abort protocol, reconciliation and the job
lifecycle controller. Submodules are imported directly; this package only
re-exports the exception hierarchy so the boundary layer can depend on it
without import cycles.
"""

from jobstatus.core.exceptions import (
    InvalidStatusTransitionError,
    JobAborted,
    JobBodyError,
    JobStatusException,
    StatusRecordDecodeError,
    TransientStoreError,
    UnknownJobClassError,
)

__all__ = [
    "InvalidStatusTransitionError",
    "JobAborted",
    "JobBodyError",
    "JobStatusException",
    "StatusRecordDecodeError",
    "TransientStoreError",
    "UnknownJobClassError",
]
