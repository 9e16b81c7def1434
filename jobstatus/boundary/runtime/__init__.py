"""
Job runtime adapters.
"""

from jobstatus.boundary.runtime.celery_runtime import TRACKED_JOB_TASK, CeleryRuntime, map_celery_state
from jobstatus.boundary.runtime.interface import BeforeEnqueueListener, JobRuntime, RuntimeJobState

__all__ = [
    "TRACKED_JOB_TASK",
    "BeforeEnqueueListener",
    "CeleryRuntime",
    "JobRuntime",
    "RuntimeJobState",
    "map_celery_state",
]
