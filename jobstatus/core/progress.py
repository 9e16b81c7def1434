"""
Weighted multi-part progress model.

A job is split into sequential parts, each worth a fraction (weight) of the
whole. Inside a part, progress comes either from reported iterations or
from elapsed time against an expected duration. Overall progress is

    accumulated weight of finished parts + part fraction * part weight

clamped to [0, 1].

Before the first next_part() call the job runs in an implicit leading part
covering all remaining work. When superseded, that implicit part folds in
only the progress it actually reported; declared parts fold in their full
weight.

Dependencies: jobstatus.core.clock, jobstatus.models.status_record
System role: Progress computation for running jobs and status readers
"""

from jobstatus.core.clock import Clock
from jobstatus.models.status_record import StatusRecord, clamp_progress

DEFAULT_PART_WEIGHT = 0.5


def iteration_fraction(iteration: float, total_iterations: float) -> float:
    """
    Part-local fraction from an iteration count.

    A non-positive total counts as already complete.
    """
    if total_iterations <= 0:
        return 1.0
    return clamp_progress(iteration / total_iterations)


def time_fraction(started: float, expected_seconds: float, now: float) -> float:
    """
    Part-local fraction extrapolated from elapsed time.

    A non-positive expected duration counts as already expired.
    """
    if expected_seconds <= 0:
        return 1.0
    elapsed = max(now - started, 0.0)
    return clamp_progress(elapsed / expected_seconds)


def extrapolate(record: StatusRecord, now: float) -> StatusRecord:
    """
    Recompute progress of a record carrying an active time-driven part.

    Used on the read path, so the result is never persisted. Concurrent
    readers may see slightly different values depending on when they read.
    The stored value is treated as a floor so a reader whose clock lags the
    worker never sees progress go backwards.

    Args:
        record: Record as loaded from the store
        now: Reader's current time

    Returns:
        StatusRecord: Record with extrapolated progress (same record if no active part)
    """
    if not record.has_active_part or record.is_terminal:
        return record
    fraction = time_fraction(record.part_started, record.part_expected_seconds, now)
    estimate = record.part_base_progress + fraction * record.part_weight
    return record.with_progress(max(record.progress, estimate))


class ProgressModel:
    """Worker-side progress state for one job."""

    def __init__(self, clock: Clock, default_part_weight: float = DEFAULT_PART_WEIGHT) -> None:
        """
        Initialize an empty model (no parts declared, zero progress).

        Args:
            clock: Time source shared with the update throttle
            default_part_weight: Weight used when next_part() gets none
        """
        self._clock = clock
        self._default_part_weight = default_part_weight
        self._accumulated = 0.0
        # None marks the implicit leading part
        self._part_weight: float | None = None
        self._iteration_fraction = 0.0
        self._part_started: float | None = None
        self._expected_seconds: float | None = None

    @property
    def accumulated(self) -> float:
        return self._accumulated

    @property
    def part_weight(self) -> float:
        if self._part_weight is None:
            return 1.0 - self._accumulated
        return self._part_weight

    @property
    def time_driven(self) -> bool:
        return self._expected_seconds is not None

    def part_fraction(self, now: float | None = None) -> float:
        if self.time_driven:
            current = self._clock.now() if now is None else now
            return time_fraction(self._part_started, self._expected_seconds, current)
        return self._iteration_fraction

    def progress(self, now: float | None = None) -> float:
        return clamp_progress(self._accumulated + self.part_fraction(now) * self.part_weight)

    def next_part(self, weight: float | None = None, expected_seconds: float | None = None) -> None:
        """
        Finish the current part and start the next one.

        Args:
            weight: Share of total work covered by the new part
            expected_seconds: If given, progress inside the part is
                extrapolated from elapsed time
        """
        now = self._clock.now()
        if self._part_weight is None:
            folded = self.part_fraction(now) * self.part_weight
        else:
            folded = self._part_weight
        self._accumulated = clamp_progress(self._accumulated + folded)
        self._part_weight = clamp_progress(self._default_part_weight if weight is None else weight)
        self._iteration_fraction = 0.0
        self._part_started = now
        self._expected_seconds = expected_seconds

    def set_part_iteration(self, iteration: float, total_iterations: float) -> None:
        """Drive the current part by iteration count; stops time extrapolation."""
        self._iteration_fraction = iteration_fraction(iteration, total_iterations)
        self._expected_seconds = None

    def set_part_time_expected(self, seconds: float) -> None:
        """Drive the current part by elapsed time, keeping a known part start."""
        self._expected_seconds = seconds
        if self._part_started is None:
            self._part_started = self._clock.now()

    def reset_to(self, progress: float) -> None:
        """Take an explicit progress value as the new baseline."""
        self._accumulated = clamp_progress(progress)
        self._part_weight = None
        self._iteration_fraction = 0.0
        self._part_started = None
        self._expected_seconds = None

    def apply(self, record: StatusRecord, now: float | None = None) -> StatusRecord:
        """
        Write the model's progress and transient part fields onto a record.

        Args:
            record: Current record
            now: Evaluation time (defaults to the clock)

        Returns:
            StatusRecord: Updated record
        """
        current = self._clock.now() if now is None else now
        updated = record.with_progress(self.progress(current))
        if not self.time_driven:
            return updated.without_part()
        return updated.with_part(
            weight=self.part_weight,
            started=self._part_started,
            expected_seconds=self._expected_seconds,
            base_progress=self._accumulated,
        )
