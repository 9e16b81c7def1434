"""
Celery job runtime adapter.

Enqueues tracked jobs through the generic tracked-job task and maps Celery
task states onto RuntimeJobState for reconciliation.

Listeners registered with add_before_enqueue_listener run with the
pre-assigned task id before the message is published, so the QUEUED record
exists before any worker can pick the job up. A listener error aborts the
enqueue (Celery's own before_task_publish signal would only log it).

Celery reports PENDING both for queued tasks and for ids it has never seen
(or whose results expired), so PENDING maps to QUEUED. With
task_track_started a running task is STARTED before the worker writes
WORKING, so the reconciler treats QUEUED as stale for a WORKING record.
Lost workers otherwise surface as FAILURE (WorkerLostError).

Dependencies: celery, kombu, jobstatus.boundary.runtime.interface
System role: Runtime adapter for Celery
"""

import logging
from typing import Any

from celery import Celery, states
from celery.result import AsyncResult
from kombu.utils.uuid import uuid

from jobstatus.boundary.runtime.interface import BeforeEnqueueListener, RuntimeJobState

logger = logging.getLogger(__name__)

TRACKED_JOB_TASK = "jobstatus.run_tracked_job"

_STATE_MAP: dict[str, RuntimeJobState] = {
    states.PENDING: RuntimeJobState.QUEUED,
    states.RECEIVED: RuntimeJobState.WORKING,
    states.STARTED: RuntimeJobState.WORKING,
    states.RETRY: RuntimeJobState.WORKING,
    states.FAILURE: RuntimeJobState.FAILED,
    states.REVOKED: RuntimeJobState.FAILED,
    states.REJECTED: RuntimeJobState.FAILED,
    # A finished task no longer has a live job behind it
    states.SUCCESS: RuntimeJobState.UNKNOWN,
}


def map_celery_state(state: str) -> RuntimeJobState:
    """Translate a Celery task state name into a RuntimeJobState."""
    return _STATE_MAP.get(state, RuntimeJobState.UNKNOWN)


class CeleryRuntime:
    """JobRuntime backed by a Celery application."""

    def __init__(self, app: Celery, task_name: str = TRACKED_JOB_TASK) -> None:
        """
        Initialize adapter.

        Args:
            app: Celery application (broker + result backend configured)
            task_name: Registered name of the tracked-job task
        """
        self._app = app
        self._task_name = task_name
        self._listeners: list[BeforeEnqueueListener] = []

    def add_before_enqueue_listener(self, listener: BeforeEnqueueListener) -> None:
        """Register a pre-publish listener; registering the same listener twice is a no-op."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def enqueue(self, queue_name: str, job_class: str, args: dict[str, Any]) -> str:
        """
        Publish a tracked job.

        Returns:
            str: Celery task id, used as the job id
        """
        job_id = uuid()
        for listener in self._listeners:
            listener(job_id, job_class, args)

        self._app.send_task(
            self._task_name,
            kwargs={"job_class": job_class, "args": args},
            queue=queue_name,
            task_id=job_id,
        )
        logger.info(f"{__name__}:enqueue - Enqueued {job_class} as {job_id} on {queue_name}")
        return job_id

    def query_job_state(self, job_id: str) -> RuntimeJobState:
        state = AsyncResult(job_id, app=self._app).state
        return map_celery_state(state)
