"""
Test suite for JobService.

Tests enqueue with the pre-enqueue hook, aborts, reconciled status reads
and listing by class against the in-memory store and a fake runtime.

System role: Verification of job status orchestration
"""

from unittest.mock import MagicMock

import pytest

from jobstatus.application.services.job_service import JobService
from jobstatus.boundary.runtime.celery_runtime import map_celery_state
from jobstatus.boundary.runtime.interface import RuntimeJobState
from jobstatus.core.exceptions import TransientStoreError, UnknownJobClassError
from jobstatus.models.status_record import JobStatus


class TestEnqueue:
    """Test suite for JobService.enqueue."""

    def test_enqueue_should_write_queued_record_before_returning(
        self, job_service: JobService, runtime, status_store, clock
    ) -> None:
        # Act
        job_id = job_service.enqueue("ExportJob", {"rows": 3})

        # Assert
        record = status_store.load(job_id)
        assert record.status is JobStatus.QUEUED
        assert record.job_class == "ExportJob"
        assert record.args == {"rows": 3}
        assert record.time_queued == clock.now()
        assert runtime.enqueued == [(job_id, "default", "ExportJob", {"rows": 3})]

    def test_enqueue_should_use_given_queue(self, job_service: JobService, runtime) -> None:
        job_service.enqueue("ExportJob", queue_name="exports")

        assert runtime.enqueued[0][1] == "exports"

    def test_enqueue_should_reject_unregistered_class(self, status_store, runtime, clock) -> None:
        service = JobService(status_store, runtime, clock=clock, known_job_classes={"ExportJob"})

        with pytest.raises(UnknownJobClassError):
            service.enqueue("MissingJob")

        assert runtime.enqueued == []

    def test_store_outage_in_hook_should_prevent_enqueue(self, runtime, clock) -> None:
        status_store = MagicMock()
        status_store.append_to_class_index.side_effect = TransientStoreError("down", operation="rpush")
        service = JobService(status_store, runtime, clock=clock)
        runtime.add_before_enqueue_listener(service.record_enqueued)

        with pytest.raises(TransientStoreError):
            service.enqueue("ExportJob")

        assert runtime.enqueued == []


class TestGetStatusInfo:
    """Test suite for JobService.get_status_info."""

    def test_unknown_job_should_return_none(self, job_service: JobService) -> None:
        assert job_service.get_status_info("missing") is None

    def test_completed_job_should_read_identically_every_time(
        self, job_service: JobService, controller, runtime, kv_store
    ) -> None:
        job_id = job_service.enqueue("ExportJob")
        job = MagicMock()
        job.run.return_value = None
        controller.run(job, job_id, "ExportJob")
        runtime.default_state = RuntimeJobState.UNKNOWN
        writes_before = kv_store.write_count

        first = job_service.get_status_info(job_id)
        second = job_service.get_status_info(job_id)

        assert first == second
        assert first.status is JobStatus.COMPLETED
        assert kv_store.write_count == writes_before

    def test_lost_job_should_read_as_failed_and_be_flagged_for_abort(
        self, job_service: JobService, runtime, status_store
    ) -> None:
        job_id = job_service.enqueue("ExportJob")
        runtime.states[job_id] = RuntimeJobState.UNKNOWN

        record = job_service.get_status_info(job_id)

        assert record.status is JobStatus.FAILED
        assert status_store.load(job_id).status is JobStatus.FAILED
        assert job_service.abort_controller.is_abort_requested(job_id)

    def test_queued_job_known_to_runtime_should_stay_queued(self, job_service: JobService, runtime) -> None:
        job_id = job_service.enqueue("ExportJob")
        runtime.states[job_id] = RuntimeJobState.QUEUED

        assert job_service.get_status_info(job_id).status is JobStatus.QUEUED

    def test_working_job_with_pending_task_should_read_as_failed(
        self, job_service: JobService, runtime, status_store
    ) -> None:
        # Arrange: the worker started, then Celery lost every trace of the task
        job_id = job_service.enqueue("ExportJob")
        status_store.save(status_store.load(job_id).start(1_000.0))
        runtime.states[job_id] = map_celery_state("PENDING")

        # Act
        record = job_service.get_status_info(job_id)

        # Assert
        assert record.status is JobStatus.FAILED
        assert status_store.load(job_id).status is JobStatus.FAILED
        assert job_service.abort_controller.is_abort_requested(job_id)

    def test_job_finishing_during_read_should_read_as_completed(
        self, job_service: JobService, runtime, status_store
    ) -> None:
        # Arrange: the worker saves COMPLETED between the record load and the runtime query
        job_id = job_service.enqueue("ExportJob")
        working = status_store.load(job_id).start(1_000.0)
        status_store.save(working)

        def finish_then_report(queried_id):
            status_store.save(working.complete(1_005.0))
            return map_celery_state("SUCCESS")

        runtime.query_job_state = finish_then_report

        # Act
        record = job_service.get_status_info(job_id)

        # Assert
        assert record.status is JobStatus.COMPLETED
        assert status_store.load(job_id).status is JobStatus.COMPLETED
        assert not job_service.abort_controller.is_abort_requested(job_id)


class TestAbortAndListing:
    """Test suite for abort and get_jobs_by_class."""

    def test_abort_should_set_flag(self, job_service: JobService) -> None:
        job_id = job_service.enqueue("ExportJob")

        job_service.abort(job_id)

        assert job_service.abort_controller.is_abort_requested(job_id)

    def test_get_jobs_by_class_should_list_most_recent_first_in_order(
        self, status_store, runtime, clock
    ) -> None:
        service = JobService(status_store, runtime, clock=clock, index_list_limit=2)
        runtime.add_before_enqueue_listener(service.record_enqueued)
        ids = [service.enqueue("ExportJob") for _ in range(3)]
        service.enqueue("OtherJob")

        assert service.get_jobs_by_class("ExportJob") == ids[1:]
        assert service.get_jobs_by_class("ExportJob", limit=10) == ids

    def test_get_jobs_by_class_with_zero_limit_should_return_nothing(self, job_service: JobService) -> None:
        job_service.enqueue("ExportJob")

        assert job_service.get_jobs_by_class("ExportJob", limit=0) == []
