"""
Tracked job Celery task.

Generic task: run_tracked_job(job_class, args)
Flow: resolve job class -> lifecycle controller -> job.run(ctx)

Aborts and failures propagate out of the task so Celery records FAILURE
for them, after the status record has been finalised.

Dependencies: celery, jobstatus.dependencies, jobstatus.workers
System role: Runtime entry point for tracked jobs
"""

from typing import Any

from jobstatus.boundary.runtime.celery_runtime import TRACKED_JOB_TASK
from jobstatus.dependencies import get_service_cache
from jobstatus.workers import celery_app
from jobstatus.workers.registry import job_registry


@celery_app.task(bind=True, name=TRACKED_JOB_TASK)
def run_tracked_job(self, job_class: str, args: dict[str, Any] | None = None) -> Any:
    """
    Run a registered job under status tracking.

    Args:
        job_class: Registered job class name
        args: Job arguments

    Returns:
        Any: Value returned by the job body
    """
    job = job_registry.create(job_class)
    controller = get_service_cache().lifecycle_controller
    return controller.run(job, job_id=self.request.id, job_class=job_class, args=args or {})
