"""
Shared test fixtures and configuration for entire test suite.

Provides: Deterministic clock, in-memory status store, fake job runtime,
job service and lifecycle controller wired together
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from typing import Any

import pytest

from jobstatus.application.services.job_service import JobService
from jobstatus.boundary.kv.memory_store import InMemoryKeyValueStore
from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.boundary.runtime.interface import RuntimeJobState
from jobstatus.core.abort import AbortController
from jobstatus.core.lifecycle import JobLifecycleController

TEST_TTL_SECONDS = 3600


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeRuntime:
    """In-process JobRuntime: records enqueues, reports configurable states."""

    def __init__(self) -> None:
        self.listeners: list = []
        self.enqueued: list[tuple[str, str, str, dict[str, Any]]] = []
        self.states: dict[str, RuntimeJobState] = {}
        self.default_state = RuntimeJobState.WORKING
        self._counter = 0

    def add_before_enqueue_listener(self, listener) -> None:
        if listener not in self.listeners:
            self.listeners.append(listener)

    def enqueue(self, queue_name: str, job_class: str, args: dict[str, Any]) -> str:
        self._counter += 1
        job_id = f"job-{self._counter}"
        for listener in self.listeners:
            listener(job_id, job_class, args)
        self.enqueued.append((job_id, queue_name, job_class, args))
        return job_id

    def query_job_state(self, job_id: str) -> RuntimeJobState:
        return self.states.get(job_id, self.default_state)


@pytest.fixture
def clock() -> FakeClock:
    """Provide deterministic clock."""
    return FakeClock()


@pytest.fixture
def kv_store(clock: FakeClock) -> InMemoryKeyValueStore:
    """Provide in-memory key-value store sharing the fake clock."""
    return InMemoryKeyValueStore(clock=clock)


@pytest.fixture
def status_store(kv_store: InMemoryKeyValueStore) -> StatusStore:
    """Provide status store over the in-memory store."""
    return StatusStore(kv_store, ttl_seconds=TEST_TTL_SECONDS)


@pytest.fixture
def abort_controller(status_store: StatusStore) -> AbortController:
    """Provide abort controller."""
    return AbortController(status_store)


@pytest.fixture
def runtime() -> FakeRuntime:
    """Provide fake job runtime."""
    return FakeRuntime()


@pytest.fixture
def job_service(status_store: StatusStore, runtime: FakeRuntime, clock: FakeClock) -> JobService:
    """Provide job service with the enqueue hook registered on the fake runtime."""
    service = JobService(status_store, runtime, clock=clock)
    runtime.add_before_enqueue_listener(service.record_enqueued)
    return service


@pytest.fixture
def controller(
    status_store: StatusStore, job_service: JobService, clock: FakeClock
) -> JobLifecycleController:
    """Provide lifecycle controller sharing the service's abort controller."""
    return JobLifecycleController(
        status_store,
        job_service.abort_controller,
        clock=clock,
        min_update_interval=0.5,
    )
