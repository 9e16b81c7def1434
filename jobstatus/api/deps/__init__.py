"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import get_job_service, get_status_store

__all__ = [
    "get_job_service",
    "get_status_store",
]
