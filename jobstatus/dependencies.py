"""
Service container.

Builds the tracking services once per process from settings and hands them
to the API dependencies and the Celery task. initialize() is called
explicitly from start-up code (API lifespan, worker_process_init); it also
imports the configured job modules and installs the enqueue hook.

Dependencies: jobstatus.configs, jobstatus.boundary, jobstatus.application, jobstatus.core, jobstatus.workers
System role: Process-wide service wiring
"""

import importlib
import logging

from jobstatus.application.services.job_service import JobService
from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.boundary.kv.store_factory import get_status_store
from jobstatus.boundary.runtime.interface import JobRuntime
from jobstatus.configs import Settings, get_settings
from jobstatus.core.lifecycle import JobLifecycleController

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for process-wide service instances."""

    def __init__(self):
        self._status_store: StatusStore | None = None
        self._runtime: JobRuntime | None = None
        self._job_service: JobService | None = None
        self._lifecycle_controller: JobLifecycleController | None = None

    @property
    def initialized(self) -> bool:
        return self._job_service is not None

    def initialize(
        self,
        settings: Settings | None = None,
        status_store: StatusStore | None = None,
        runtime: JobRuntime | None = None,
    ) -> None:
        """
        Build services. Safe to call more than once; later calls are no-ops.

        Args:
            settings: Application settings (defaults to get_settings())
            status_store: Pre-built status store (tests, alternative backends)
            runtime: Pre-built job runtime (defaults to the Celery runtime)
        """
        if self.initialized:
            return

        from jobstatus.workers.hooks import install_enqueue_hook
        from jobstatus.workers.registry import job_registry

        settings = settings or get_settings()
        tracking = settings.tracking

        for module in tracking.job_modules:
            importlib.import_module(module)

        if runtime is None:
            from jobstatus.boundary.runtime.celery_runtime import CeleryRuntime
            from jobstatus.workers import celery_app

            runtime = CeleryRuntime(celery_app)

        self._status_store = status_store or get_status_store(settings)
        self._runtime = runtime
        self._job_service = JobService(
            status_store=self._status_store,
            runtime=runtime,
            default_queue=settings.celery.default_queue,
            index_list_limit=tracking.index_list_limit,
            known_job_classes=job_registry,
        )
        self._lifecycle_controller = JobLifecycleController(
            status_store=self._status_store,
            abort_controller=self._job_service.abort_controller,
            min_update_interval=tracking.min_update_interval_seconds,
            default_part_weight=tracking.default_part_weight,
        )
        install_enqueue_hook(runtime, self._job_service)
        logger.info(
            f"{__name__}:initialize - Services ready (store backend: {tracking.store_backend})"
        )

    @property
    def status_store(self) -> StatusStore:
        """Get status store."""
        self._require_initialized()
        return self._status_store

    @property
    def runtime(self) -> JobRuntime:
        """Get job runtime."""
        self._require_initialized()
        return self._runtime

    @property
    def job_service(self) -> JobService:
        """Get job service."""
        self._require_initialized()
        return self._job_service

    @property
    def lifecycle_controller(self) -> JobLifecycleController:
        """Get lifecycle controller."""
        self._require_initialized()
        return self._lifecycle_controller

    def clear(self) -> None:
        """Clear all cached instances."""
        self._status_store = None
        self._runtime = None
        self._job_service = None
        self._lifecycle_controller = None

    def _require_initialized(self) -> None:
        if not self.initialized:
            raise RuntimeError("ServiceCache.initialize() has not been called")


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache
