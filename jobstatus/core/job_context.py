"""
Job-facing status API.

A JobContext is handed to a job body for the duration of one run. It owns
the job's current StatusRecord, its progress model and its write throttle;
every update checks for an abort first, then writes through the throttle.

Dependencies: jobstatus.boundary.kv, jobstatus.core, jobstatus.models
System role: Progress, message and checkpoint API for job implementations
"""

import logging
from typing import Any, Callable, Iterable, Iterator, TypeVar

from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.core.abort import AbortController, CancellationToken
from jobstatus.core.clock import Clock
from jobstatus.core.progress import ProgressModel
from jobstatus.core.throttle import UpdateThrottle
from jobstatus.models.status_record import StatusRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JobContext:
    """Status, progress and cancellation handle for a running job."""

    def __init__(
        self,
        record: StatusRecord,
        status_store: StatusStore,
        abort_controller: AbortController,
        clock: Clock,
        min_update_interval: float,
        default_part_weight: float,
    ) -> None:
        """
        Initialize context around an existing record.

        Args:
            record: Current status record of the job
            status_store: Persistence for status writes
            abort_controller: Abort flag access
            clock: Shared time source for progress math and throttling
            min_update_interval: Minimum seconds between throttled writes
            default_part_weight: Weight used by next_part() when none is given
        """
        self._record = record
        self._status_store = status_store
        self._abort_controller = abort_controller
        self._clock = clock
        self._model = ProgressModel(clock, default_part_weight)
        self._model.reset_to(record.progress)
        self._throttle = UpdateThrottle(clock, min_update_interval)
        self._closed = False
        self.cancellation: CancellationToken = abort_controller.token(record.job_id)

    # ── Read-only views ───────────────────────────────────────────────

    @property
    def job_id(self) -> str:
        return self._record.job_id

    @property
    def args(self) -> dict[str, Any]:
        return dict(self._record.args)

    @property
    def record(self) -> StatusRecord:
        return self._record

    @property
    def closed(self) -> bool:
        return self._closed

    # ── Job body API ──────────────────────────────────────────────────

    def checkpoint(self) -> None:
        """
        Yield point for cooperative cancellation.

        Raises JobAborted if an abort was requested. While a time-driven
        part is active, also refreshes the extrapolated progress through
        the throttle.
        """
        if self._skip_if_closed("checkpoint"):
            return
        self._abort_controller.checkpoint(self.job_id)
        if self._model.time_driven:
            self._record = self._model.apply(self._record, self._clock.now())
            self._persist(force=False)

    def set_progress(self, progress: float, message: str | None = None, force: bool = False) -> None:
        """
        Set overall progress explicitly.

        The value becomes the new baseline for any parts declared afterwards.

        Args:
            progress: Overall progress, clamped to [0, 1]
            message: Optional message to set alongside
            force: Write immediately instead of through the throttle
        """
        if self._skip_if_closed("set_progress"):
            return
        self._abort_controller.checkpoint(self.job_id)
        self._model.reset_to(progress)
        record = self._record.with_progress(progress).without_part()
        if message is not None:
            record = record.with_message(message)
        self._record = record
        self._persist(force)

    def set_message(self, message: str, force: bool = False) -> None:
        if self._skip_if_closed("set_message"):
            return
        self._abort_controller.checkpoint(self.job_id)
        self._record = self._record.with_message(message)
        self._persist(force)

    def next_part(
        self,
        weight: float | None = None,
        expected_seconds: float | None = None,
        message: str | None = None,
        force: bool = False,
    ) -> None:
        """
        Close the current part and start a new one.

        Args:
            weight: Share of the whole job this part represents
            expected_seconds: Expected duration; enables time extrapolation
            message: Optional message describing the new part
            force: Write immediately instead of through the throttle
        """
        if self._skip_if_closed("next_part"):
            return
        self._abort_controller.checkpoint(self.job_id)
        self._model.next_part(weight, expected_seconds)
        self._apply_model(message)
        self._persist(force)

    def set_part_iteration(self, iteration: float, total_iterations: float, force: bool = False) -> None:
        """Report iteration progress within the current part."""
        if self._skip_if_closed("set_part_iteration"):
            return
        self._abort_controller.checkpoint(self.job_id)
        self._model.set_part_iteration(iteration, total_iterations)
        self._apply_model()
        self._persist(force)

    def set_part_time_expected(self, seconds: float, force: bool = False) -> None:
        """Switch the current part to time-driven progress."""
        if self._skip_if_closed("set_part_time_expected"):
            return
        self._abort_controller.checkpoint(self.job_id)
        self._model.set_part_time_expected(seconds)
        self._apply_model()
        self._persist(force)

    def iterate(self, items: Iterable[T], total: int | None = None) -> Iterator[T]:
        """
        Iterate while reporting part progress and checking for aborts.

        Args:
            items: Items to process
            total: Number of items; taken from len(items) when available

        Yields:
            Each item, after a checkpoint and an iteration report
        """
        if total is None and hasattr(items, "__len__"):
            total = len(items)
        done = 0
        for item in items:
            if total is None:
                self.checkpoint()
            else:
                self.set_part_iteration(done, total)
            yield item
            done += 1
        if total is not None:
            self.set_part_iteration(total, total)

    # ── Lifecycle controller hooks ────────────────────────────────────

    def transition(self, update: Callable[[StatusRecord], StatusRecord]) -> StatusRecord:
        """
        Apply a lifecycle transition and write it unconditionally.

        Raises:
            InvalidStatusTransitionError: Transition not allowed from the current state
            TransientStoreError: Store unavailable; never swallowed
        """
        self._record = update(self._record)
        self._persist(force=True)
        return self._record

    def close(self) -> None:
        """Stop accepting updates; the record is final."""
        self._closed = True

    # ── Internals ─────────────────────────────────────────────────────

    def _apply_model(self, message: str | None = None) -> None:
        record = self._model.apply(self._record, self._clock.now())
        if message is not None:
            record = record.with_message(message)
        self._record = record

    def _persist(self, force: bool) -> None:
        def save() -> None:
            self._status_store.save(self._record)

        if force:
            self._throttle.force_save(save)
        else:
            self._throttle.maybe_save(save)

    def _skip_if_closed(self, operation: str) -> bool:
        if self._closed:
            logger.debug(f"{__name__}:{operation} - Ignored for finished job {self.job_id}")
        return self._closed
