"""
Job lifecycle controller.

Wraps one execution of a job body with status tracking:

    load or initialise record -> WORKING (forced write)
    -> run body -> COMPLETED | ABORTED | FAILED (forced write)

The terminal write is attempted whatever the body did. Aborts and failures
are re-raised afterwards so the runtime's own result handling still sees
them; the status record is an overlay, not a replacement.

Dependencies: jobstatus.boundary.kv, jobstatus.core, jobstatus.models, jobstatus.observability
System role: Job execution orchestration
"""

import logging
from typing import Any, Protocol

from jobstatus.boundary.kv.status_store import StatusStore
from jobstatus.core.abort import AbortController
from jobstatus.core.clock import Clock, system_clock
from jobstatus.core.exceptions import JobAborted, JobBodyError
from jobstatus.core.job_context import JobContext
from jobstatus.core.progress import DEFAULT_PART_WEIGHT
from jobstatus.core.results import Aborted, Failed, JobResult, Ok, describe_error
from jobstatus.models.status_record import JobStatus, StatusRecord
from jobstatus.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class TrackedJob(Protocol):
    """A job implementation: all status machinery arrives through ctx."""

    def run(self, ctx: JobContext) -> JobResult | Any:
        ...


class JobLifecycleController:
    """Runs job bodies and records their lifecycle in the status store."""

    def __init__(
        self,
        status_store: StatusStore,
        abort_controller: AbortController,
        clock: Clock = system_clock,
        min_update_interval: float = 0.5,
        default_part_weight: float = DEFAULT_PART_WEIGHT,
    ) -> None:
        """
        Initialize controller.

        Args:
            status_store: Status persistence
            abort_controller: Abort flag access
            clock: Time source for timestamps, progress math and throttling
            min_update_interval: Minimum seconds between throttled writes
            default_part_weight: Weight used by next_part() when none is given
        """
        self._status_store = status_store
        self._abort_controller = abort_controller
        self._clock = clock
        self._min_update_interval = min_update_interval
        self._default_part_weight = default_part_weight

    def run(
        self,
        job: TrackedJob,
        job_id: str,
        job_class: str,
        args: dict[str, Any] | None = None,
    ) -> Any:
        """
        Execute a job body with full status tracking.

        Args:
            job: Job implementation
            job_id: Runtime-assigned job id
            job_class: Registered job class name
            args: Job arguments

        Returns:
            Any: Value carried by the body's Ok result (or its plain return value)

        Raises:
            JobAborted: Job was aborted (after ABORTED was written)
            Exception: Original body error (after FAILED was written)
            JobBodyError: Body returned Failed (after FAILED was written)
            TransientStoreError: A lifecycle write failed
        """
        ctx = self.start(job_id, job_class, args)
        outcome = self._execute(job, ctx)
        return self._finish(ctx, outcome)

    def start(self, job_id: str, job_class: str, args: dict[str, Any] | None = None) -> JobContext:
        """
        Load the job's record and move it to WORKING.

        Raises:
            JobAborted: Record is already terminal (e.g. failed by reconciliation
                before pickup); the record is left as is
            TransientStoreError: Store unavailable
        """
        now = self._clock.now()
        record = self._status_store.load(job_id)
        if record is None:
            logger.warning(
                f"{__name__}:start - No status record for job {job_id}; initialising one"
            )
            record = StatusRecord.queued(job_id, job_class, args, now)
        elif record.is_terminal:
            logger.warning(
                f"{__name__}:start - Job {job_id} is already {record.status.value}; not running it"
            )
            raise JobAborted(job_id, reason=f"status already {record.status.value}")

        ctx = JobContext(
            record,
            self._status_store,
            self._abort_controller,
            self._clock,
            self._min_update_interval,
            self._default_part_weight,
        )
        if record.status is JobStatus.WORKING:
            # Redelivered after a worker loss; keep the original start time and progress
            logger.warning(f"{__name__}:start - Job {job_id} was already working; resuming")
            ctx.transition(lambda r: r.without_part())
        else:
            ctx.transition(lambda r: r.start(now))
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:start - Job {job_id} ({job_class}) working",
            job_id=job_id,
            job_class=job_class,
        )
        return ctx

    def _execute(self, job: TrackedJob, ctx: JobContext) -> JobResult:
        try:
            ctx.checkpoint()
            result = job.run(ctx)
        except JobAborted as e:
            return Aborted(reason=e.reason, exception=e)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_execute - Job {ctx.job_id} raised",
                e,
                job_id=ctx.job_id,
                job_class=ctx.record.job_class,
            )
            return Failed(error=describe_error(e), exception=e)

        if result is None:
            return Ok()
        if isinstance(result, (Ok, Aborted, Failed)):
            return result
        return Ok(value=result)

    def _finish(self, ctx: JobContext, outcome: JobResult) -> Any:
        now = self._clock.now()
        try:
            if isinstance(outcome, Ok):
                record = ctx.transition(lambda r: r.complete(now))
            elif isinstance(outcome, Aborted):
                record = ctx.transition(lambda r: r.abort(now))
            else:
                record = ctx.transition(lambda r: r.fail(outcome.error, now))
        finally:
            ctx.close()

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:_finish - Job {record.job_id} {record.status.value}",
            job_id=record.job_id,
            job_class=record.job_class,
            status=record.status,
        )

        if isinstance(outcome, Ok):
            return outcome.value
        if isinstance(outcome, Aborted):
            raise outcome.exception or JobAborted(record.job_id, reason=outcome.reason)
        raise outcome.exception or JobBodyError(record.job_id, outcome.error)
