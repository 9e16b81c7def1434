"""
Test suite for JobLifecycleController.

Tests the WORKING -> COMPLETED | ABORTED | FAILED lifecycle around job
bodies, including the two-part export scenario end to end.

System role: Verification of job execution orchestration
"""

from unittest.mock import MagicMock

import pytest

from jobstatus.core.exceptions import JobAborted, JobBodyError, TransientStoreError
from jobstatus.core.results import Aborted, Failed, Ok
from jobstatus.models.status_record import JobStatus, StatusRecord


class ExportJob:
    """Two parts weighted 0.3/0.7, recording progress seen after each step."""

    def __init__(self, clock) -> None:
        self.clock = clock
        self.seen: list[float] = []

    def run(self, ctx):
        ctx.next_part(0.3)
        ctx.set_part_iteration(5, 10)
        self.seen.append(ctx.record.progress)
        self.clock.advance(0.6)
        ctx.next_part(0.7)
        self.seen.append(ctx.record.progress)
        self.clock.advance(0.6)
        ctx.set_part_iteration(10, 10)
        self.seen.append(ctx.record.progress)
        return {"rows": 10}


class CallbackJob:
    def __init__(self, body) -> None:
        self.body = body

    def run(self, ctx):
        return self.body(ctx)


def _enqueue(job_service, job_class: str = "ExportJob") -> str:
    return job_service.enqueue(job_class, {"rows": 10})


class TestJobLifecycleController:
    """Test suite for JobLifecycleController."""

    def test_export_job_should_report_weighted_progress_and_complete(
        self, controller, job_service, status_store, clock
    ) -> None:
        # Arrange
        job_id = _enqueue(job_service)
        job = ExportJob(clock)
        clock.advance(1.0)

        # Act
        result = controller.run(job, job_id, "ExportJob", {"rows": 10})

        # Assert
        assert result == {"rows": 10}
        assert job.seen == pytest.approx([0.15, 0.3, 1.0])
        record = status_store.load(job_id)
        assert record.status is JobStatus.COMPLETED
        assert record.progress == 1.0
        assert record.time_started < record.time_ended

    def test_completed_record_should_have_start_before_end(
        self, controller, job_service, status_store, clock
    ) -> None:
        job_id = _enqueue(job_service)

        def body(ctx):
            clock.advance(2.0)
            ctx.set_progress(0.5)

        controller.run(CallbackJob(body), job_id, "ExportJob")

        record = status_store.load(job_id)
        assert record.time_queued <= record.time_started < record.time_ended

    def test_abort_should_record_aborted_with_end_time_and_reraise(
        self, controller, job_service, status_store, clock
    ) -> None:
        job_id = _enqueue(job_service)

        def body(ctx):
            ctx.set_progress(0.2)
            clock.advance(1.0)
            job_service.abort(ctx.job_id)
            ctx.checkpoint()
            pytest.fail("checkpoint should have raised")

        with pytest.raises(JobAborted):
            controller.run(CallbackJob(body), job_id, "ExportJob")

        record = status_store.load(job_id)
        assert record.status is JobStatus.ABORTED
        assert record.time_ended is not None
        assert record.progress == pytest.approx(0.2)

    def test_abort_requested_before_pickup_should_stop_before_body(
        self, controller, job_service, status_store
    ) -> None:
        job_id = _enqueue(job_service)
        job_service.abort(job_id)
        body = MagicMock()

        with pytest.raises(JobAborted):
            controller.run(CallbackJob(body), job_id, "ExportJob")

        body.assert_not_called()
        assert status_store.load(job_id).status is JobStatus.ABORTED

    def test_raising_body_should_record_failed_and_reraise_original(
        self, controller, job_service, status_store
    ) -> None:
        job_id = _enqueue(job_service)

        def body(ctx):
            raise ValueError("bad row 7")

        with pytest.raises(ValueError, match="bad row 7"):
            controller.run(CallbackJob(body), job_id, "ExportJob")

        record = status_store.load(job_id)
        assert record.status is JobStatus.FAILED
        assert record.error == "ValueError: bad row 7"
        assert record.time_ended is not None

    def test_failed_result_should_record_failed_and_raise_job_body_error(
        self, controller, job_service, status_store
    ) -> None:
        job_id = _enqueue(job_service)

        with pytest.raises(JobBodyError):
            controller.run(CallbackJob(lambda ctx: Failed(error="quota exceeded")), job_id, "ExportJob")

        assert status_store.load(job_id).error == "quota exceeded"

    def test_aborted_result_should_record_aborted(self, controller, job_service, status_store) -> None:
        job_id = _enqueue(job_service)

        with pytest.raises(JobAborted):
            controller.run(CallbackJob(lambda ctx: Aborted(reason="token")), job_id, "ExportJob")

        assert status_store.load(job_id).status is JobStatus.ABORTED

    def test_ok_result_should_return_its_value(self, controller, job_service) -> None:
        job_id = _enqueue(job_service)

        assert controller.run(CallbackJob(lambda ctx: Ok(value=42)), job_id, "ExportJob") == 42

    def test_terminal_state_should_ignore_later_updates(
        self, controller, job_service, status_store
    ) -> None:
        job_id = _enqueue(job_service)
        captured = {}

        def body(ctx):
            captured["ctx"] = ctx

        controller.run(CallbackJob(body), job_id, "ExportJob")
        ctx = captured["ctx"]
        job_service.abort(job_id)
        ctx.checkpoint()
        ctx.set_progress(0.1, force=True)

        record = status_store.load(job_id)
        assert record.status is JobStatus.COMPLETED
        assert record.progress == 1.0

    def test_terminal_record_at_pickup_should_not_run_body(
        self, controller, status_store
    ) -> None:
        failed = StatusRecord.queued("job-9", "ExportJob", {}, 1_000.0).fail("lost")
        status_store.save(failed)
        body = MagicMock()

        with pytest.raises(JobAborted):
            controller.run(CallbackJob(body), "job-9", "ExportJob")

        body.assert_not_called()
        assert status_store.load("job-9") == failed

    def test_missing_record_should_be_initialised(self, controller, status_store) -> None:
        controller.run(CallbackJob(lambda ctx: None), "job-7", "ExportJob", {"a": 1})

        record = status_store.load("job-7")
        assert record.status is JobStatus.COMPLETED
        assert record.args == {"a": 1}

    def test_redelivered_working_record_should_resume(self, controller, status_store) -> None:
        working = StatusRecord.queued("job-8", "ExportJob", {}, 900.0).start(950.0)
        status_store.save(working)

        controller.run(CallbackJob(lambda ctx: None), "job-8", "ExportJob")

        record = status_store.load("job-8")
        assert record.status is JobStatus.COMPLETED
        assert record.time_started == 950.0

    def test_redelivered_working_record_should_keep_its_progress(self, controller, status_store) -> None:
        # Arrange
        working = StatusRecord.queued("job-9", "ExportJob", {}, 900.0).start(950.0).with_progress(0.6)
        status_store.save(working)
        seen: list[float] = []

        def body(ctx):
            seen.append(ctx.record.progress)
            ctx.set_part_iteration(5, 10)
            seen.append(ctx.record.progress)
            ctx.next_part(0.2)
            seen.append(ctx.record.progress)

        # Act
        controller.run(CallbackJob(body), "job-9", "ExportJob")

        # Assert
        assert seen == pytest.approx([0.6, 0.8, 0.8])
        assert status_store.load("job-9").progress == pytest.approx(1.0)

    def test_store_outage_on_terminal_write_should_propagate(
        self, controller, job_service, status_store
    ) -> None:
        job_id = _enqueue(job_service)
        original_save = status_store.save

        def body(ctx):
            status_store.save = MagicMock(side_effect=TransientStoreError("down", operation="set"))

        try:
            with pytest.raises(TransientStoreError):
                controller.run(CallbackJob(body), job_id, "ExportJob")
        finally:
            status_store.save = original_save

        assert status_store.load(job_id).status is JobStatus.WORKING
