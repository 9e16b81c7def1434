"""
Job service orchestrator.

Public operations of the tracking subsystem: enqueue tracked jobs, request
aborts, read reconciled status and list jobs by class. Also holds the body
of the pre-enqueue hook that writes the initial QUEUED record.

Dependencies: jobstatus.boundary, jobstatus.core, jobstatus.models
System role: Job status orchestration for the API and the runtime hook
"""

import logging
from typing import Any, Container

from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.boundary.runtime.interface import JobRuntime
from jobstatus.core.abort import AbortController
from jobstatus.core.clock import Clock, system_clock
from jobstatus.core.exceptions import UnknownJobClassError
from jobstatus.core.reconciler import Reconciler
from jobstatus.models.status_record import StatusRecord
from jobstatus.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class JobService:
    """
    Job service orchestrator.

    Wraps the status store, abort controller and reconciler behind the
    operations exposed to callers outside the worker.
    """

    def __init__(
        self,
        status_store: StatusStore,
        runtime: JobRuntime,
        clock: Clock = system_clock,
        default_queue: str = "default",
        index_list_limit: int = 9999,
        known_job_classes: Container[str] | None = None,
    ) -> None:
        """
        Initialize job service.

        Args:
            status_store: Status persistence
            runtime: Queue runtime used to enqueue and to check live state
            clock: Time source for enqueue timestamps and extrapolation
            default_queue: Queue used when enqueue() gets none
            index_list_limit: Default size of get_jobs_by_class() results
            known_job_classes: If given, enqueue() rejects class names not in it
        """
        self.status_store = status_store
        self.runtime = runtime
        self.clock = clock
        self.abort_controller = AbortController(status_store)
        self.reconciler = Reconciler(status_store, runtime, self.abort_controller, clock)
        self.default_queue = default_queue
        self.index_list_limit = index_list_limit
        self.known_job_classes = known_job_classes

    def enqueue(
        self,
        job_class: str,
        args: dict[str, Any] | None = None,
        queue_name: str | None = None,
    ) -> str:
        """
        Submit a tracked job to the runtime.

        The QUEUED record is written by the enqueue hook, which the runtime
        fires before the job becomes visible to workers.

        Args:
            job_class: Registered job class name
            args: JSON-serialisable job arguments
            queue_name: Target queue (defaults to the configured queue)

        Returns:
            str: Job id assigned by the runtime

        Raises:
            UnknownJobClassError: job_class is not registered
        """
        if self.known_job_classes is not None and job_class not in self.known_job_classes:
            raise UnknownJobClassError(job_class)
        job_id = self.runtime.enqueue(queue_name or self.default_queue, job_class, dict(args or {}))
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:enqueue - Enqueued job {job_id} ({job_class})",
            job_id=job_id,
            job_class=job_class,
        )
        return job_id

    def record_enqueued(self, job_id: str, job_class: str, args: dict[str, Any] | None) -> StatusRecord:
        """
        Write the initial QUEUED record and index entry for a new job.

        Args:
            job_id: Runtime-assigned job id
            job_class: Job class name
            args: Job arguments snapshot

        Returns:
            StatusRecord: The record written

        Raises:
            TransientStoreError: Store unavailable; the enqueue must not proceed
        """
        record = StatusRecord.queued(job_id, job_class, args, self.clock.now())
        self.status_store.append_to_class_index(job_class, job_id)
        self.status_store.save(record)
        return record

    def abort(self, job_id: str) -> None:
        """Request cooperative cancellation of a job."""
        self.abort_controller.request_abort(job_id)

    def get_status_info(self, job_id: str) -> StatusRecord | None:
        """
        Get reconciled job status for external readers.

        Stale QUEUED/WORKING records are flipped to FAILED first; active
        time-driven parts get their progress extrapolated to now (not persisted).

        Args:
            job_id: Job id

        Returns:
            StatusRecord if the job is known, None if absent or expired

        Raises:
            TransientStoreError: Store unavailable
        """
        record = self.status_store.load(job_id)
        if record is None:
            return None
        return self.reconciler.read(record)

    def get_jobs_by_class(self, job_class: str, limit: int | None = None) -> list[str]:
        """
        List the most recent job ids of a class in insertion order.

        Args:
            job_class: Job class name
            limit: Maximum number of ids (defaults to the configured limit)

        Returns:
            list[str]: Job ids, oldest first; may contain duplicates and expired jobs
        """
        return self.status_store.list_class_index(job_class, self.index_list_limit if limit is None else limit)
