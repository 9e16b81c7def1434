"""
Enqueue hook installation.

Called once from process start-up code (API lifespan, worker init) so the
runtime writes the QUEUED record of every tracked job before publishing it.

Dependencies: jobstatus.application, jobstatus.boundary.runtime
System role: Pre-enqueue status initialisation
"""

import logging

from jobstatus.application.services.job_service import JobService
from jobstatus.boundary.runtime.interface import JobRuntime

logger = logging.getLogger(__name__)


def install_enqueue_hook(runtime: JobRuntime, service: JobService) -> None:
    """
    Register the service's QUEUED-record writer with the runtime.

    Idempotent: the runtime ignores a listener it already holds.

    Args:
        runtime: Job runtime that publishes tracked jobs
        service: Job service whose record_enqueued() writes the initial status
    """
    runtime.add_before_enqueue_listener(service.record_enqueued)
    logger.info(f"{__name__}:install_enqueue_hook - Enqueue hook installed")
