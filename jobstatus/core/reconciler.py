"""
Read-time reconciliation of stale status records.

A record claiming QUEUED or WORKING is cross-checked against the runtime.
If the runtime reports the job as failed, or has no knowledge of it, the
record is flipped to FAILED and an abort is issued in case a worker is in
fact still alive. A WORKING record whose job the runtime only knows as
queued is stale too: started tasks report STARTED before the worker writes
WORKING, so a runtime that answers "queued" has lost the task.

The record is reloaded after the runtime query and left alone if its
status changed meanwhile, so a worker that finished (or started) during
the read keeps what it wrote. The check only runs when someone reads the
status; dead jobs that nobody queries stay stale until their TTL expires.

Dependencies: jobstatus.boundary, jobstatus.core, jobstatus.models
System role: Stale job detection and correction
"""

import logging

from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.boundary.runtime.interface import JobRuntime, RuntimeJobState
from jobstatus.core.abort import AbortController
from jobstatus.core.clock import Clock
from jobstatus.core.progress import extrapolate
from jobstatus.models.status_record import JobStatus, StatusRecord
from jobstatus.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

_STALE_STATES = frozenset({RuntimeJobState.FAILED, RuntimeJobState.UNKNOWN})


def _is_stale(record: StatusRecord, runtime_state: RuntimeJobState) -> bool:
    if runtime_state in _STALE_STATES:
        return True
    return record.status is JobStatus.WORKING and runtime_state is RuntimeJobState.QUEUED


class Reconciler:
    """Corrects records whose job the runtime no longer knows as alive."""

    def __init__(
        self,
        status_store: StatusStore,
        runtime: JobRuntime,
        abort_controller: AbortController,
        clock: Clock,
    ) -> None:
        self._status_store = status_store
        self._runtime = runtime
        self._abort_controller = abort_controller
        self._clock = clock

    def reconcile(self, record: StatusRecord) -> StatusRecord:
        """
        Flip a stale QUEUED/WORKING record to FAILED.

        Only the status (and an explanatory error) changes; progress is left
        as the worker last wrote it. Terminal records, including records that
        became terminal while the runtime was queried, are never overwritten.

        Args:
            record: Record as loaded from the store

        Returns:
            StatusRecord: The corrected record, or the input if it is consistent
        """
        if not record.is_active:
            return record

        runtime_state = self._runtime.query_job_state(record.job_id)
        if not _is_stale(record, runtime_state):
            return record

        # The worker may have moved on since the caller loaded the record
        current = self._status_store.load(record.job_id)
        if current is None:
            return record
        if current.status is not record.status:
            return current
        record = current

        log_with_context(
            logger,
            logging.WARNING,
            f"{__name__}:reconcile - Job {record.job_id} is {record.status.value} "
            f"but runtime reports {runtime_state.value}; marking failed",
            job_id=record.job_id,
            job_class=record.job_class,
            runtime_state=runtime_state,
        )
        # Flag first so a worker that is still alive stops before it can overwrite FAILED
        self._abort_controller.request_abort(record.job_id)
        failed = record.fail(f"Job lost by runtime (runtime state: {runtime_state.value})")
        self._status_store.save(failed)
        return failed

    def read(self, record: StatusRecord) -> StatusRecord:
        """Reconcile, then extrapolate time-driven progress for display."""
        return extrapolate(self.reconcile(record), self._clock.now())
