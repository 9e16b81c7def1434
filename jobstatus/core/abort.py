"""
Cooperative cancellation.

An abort is a TTL-bounded flag in the store. Running jobs poll it at
checkpoints; nothing is ever pre-empted, so a job that never reaches a
checkpoint cannot be aborted promptly.

Dependencies: jobstatus.boundary.kv, jobstatus.core.exceptions
System role: Abort request and detection
"""

import logging

from jobstatus.boundary.kv.keys import CONTROL_ABORT
from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.core.exceptions import JobAborted

logger = logging.getLogger(__name__)


class AbortController:
    """Sets and polls per-job abort flags."""

    def __init__(self, status_store: StatusStore) -> None:
        self._status_store = status_store

    def request_abort(self, job_id: str) -> None:
        """Flag a job for cancellation at its next checkpoint."""
        self._status_store.set_control(job_id, CONTROL_ABORT)
        logger.info(f"{__name__}:request_abort - Abort requested for job {job_id}")

    def is_abort_requested(self, job_id: str) -> bool:
        return self._status_store.get_control(job_id, CONTROL_ABORT)

    def checkpoint(self, job_id: str) -> None:
        """
        Raise if an abort has been requested.

        Raises:
            JobAborted: Abort flag is set
            TransientStoreError: Store unavailable
        """
        if self.is_abort_requested(job_id):
            raise JobAborted(job_id, reason="abort requested")

    def token(self, job_id: str) -> "CancellationToken":
        return CancellationToken(self, job_id)


class CancellationToken:
    """
    Job-scoped view of the abort flag.

    Lets a job body test for cancellation and stop by returning an
    Aborted result instead of raising.
    """

    def __init__(self, controller: AbortController, job_id: str) -> None:
        self._controller = controller
        self._job_id = job_id

    @property
    def requested(self) -> bool:
        return self._controller.is_abort_requested(self._job_id)

    def raise_if_requested(self) -> None:
        self._controller.checkpoint(self._job_id)
