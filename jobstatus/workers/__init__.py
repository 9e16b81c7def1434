"""
Celery workers module.

Celery application that executes tracked jobs. The worker builds its
services once at start-up through the worker_init signal; prefork children
inherit them (redis-py resets its connection pool after a fork).

Dependencies: celery, jobstatus.configs
System role: Background job execution
"""

from celery import Celery
from celery.signals import worker_init

from jobstatus.configs import get_settings

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    settings.app_name,
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["jobstatus.workers.tasks.tracked_job"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
    task_default_queue=celery_config.default_queue,
    task_track_started=celery_config.task_track_started,
)


@worker_init.connect
def init_worker(**kwargs) -> None:
    """Configure logging and build tracking services for the worker."""
    from jobstatus.dependencies import get_service_cache
    from jobstatus.observability.logger import configure_logging

    configure_logging()
    get_service_cache().initialize()
