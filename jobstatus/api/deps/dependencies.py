"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: jobstatus.dependencies
System role: DI container for service injection
"""

from jobstatus.application.services.job_service import JobService
from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.dependencies import get_service_cache


def get_job_service() -> JobService:
    """
    Get job service instance.

    Returns:
        JobService: Process-wide job service built at start-up
    """
    return get_service_cache().job_service


def get_status_store() -> StatusStore:
    """
    Get status store instance.

    Returns:
        StatusStore: Process-wide status store built at start-up
    """
    return get_service_cache().status_store
