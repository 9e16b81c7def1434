"""
Job class registry.

Maps job class names (as passed to enqueue) to job implementations. A job
implementation is any class whose instances provide run(ctx).

Dependencies: jobstatus.core
System role: Job class lookup for workers and enqueue validation
"""

import logging
from typing import Callable, Iterator, TypeVar

from jobstatus.core.exceptions import UnknownJobClassError
from jobstatus.core.lifecycle import TrackedJob

logger = logging.getLogger(__name__)

J = TypeVar("J")


class JobRegistry:
    """Name -> factory mapping for tracked jobs."""

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], TrackedJob]] = {}

    def register(self, name: str | None = None) -> Callable[[J], J]:
        """
        Class decorator registering a job implementation.

        Args:
            name: Job class name (defaults to the class __name__)

        Usage:
            @job_registry.register()
            class ExportJob:
                def run(self, ctx): ...
        """

        def decorator(job_cls: J) -> J:
            self.add(name or job_cls.__name__, job_cls)
            return job_cls

        return decorator

    def add(self, name: str, factory: Callable[[], TrackedJob]) -> None:
        if name in self._factories:
            logger.warning(f"{__name__}:add - Replacing registered job class {name}")
        self._factories[name] = factory

    def create(self, name: str) -> TrackedJob:
        """
        Instantiate the job registered under name.

        Raises:
            UnknownJobClassError: Nothing registered under name
        """
        try:
            factory = self._factories[name]
        except KeyError:
            raise UnknownJobClassError(name) from None
        return factory()

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)


job_registry = JobRegistry()
