"""
Job API endpoints.

Routes: POST /jobs, GET /jobs, GET /jobs/{id}, POST /jobs/{id}/abort

Dependencies: jobstatus.application.services.job_service, jobstatus.models
System role: Job status HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from jobstatus.api.deps import get_job_service
from jobstatus.application.services.job_service import JobService
from jobstatus.core.exceptions import TransientStoreError, UnknownJobClassError
from jobstatus.models.job import (
    EnqueueRequest,
    EnqueueResponse,
    JobListResponse,
    JobStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _store_unavailable(e: TransientStoreError) -> HTTPException:
    logger.error(f"{__name__} - Status store unavailable: {e}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Status store unavailable",
    )


@router.post("", response_model=EnqueueResponse, status_code=status.HTTP_202_ACCEPTED)
def enqueue_job(
    request: EnqueueRequest,
    job_service: JobService = Depends(get_job_service),
) -> EnqueueResponse:
    """
    Enqueue a tracked job.

    The QUEUED status record exists before this call returns.

    Raises:
        HTTPException(404): Job class not registered
        HTTPException(503): Status store unavailable; nothing was enqueued
    """
    try:
        job_id = job_service.enqueue(request.job_class, request.args, request.queue_name)
    except UnknownJobClassError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except TransientStoreError as e:
        raise _store_unavailable(e)
    return EnqueueResponse(job_id=job_id)


@router.get("", response_model=JobListResponse)
def list_jobs(
    job_class: str = Query(min_length=1),
    limit: int | None = Query(default=None, gt=0),
    job_service: JobService = Depends(get_job_service),
) -> JobListResponse:
    """
    List the most recent job ids of a class, oldest first.

    Ids may be duplicated or refer to expired jobs.
    """
    try:
        job_ids = job_service.get_jobs_by_class(job_class, limit)
    except TransientStoreError as e:
        raise _store_unavailable(e)
    return JobListResponse(job_class=job_class, job_ids=job_ids)


@router.get("/{job_id}", response_model=JobStatusResponse)
def get_job_status(
    job_id: str,
    job_service: JobService = Depends(get_job_service),
) -> JobStatusResponse:
    """
    Get job status and progress for polling.

    Stale QUEUED/WORKING records are reconciled against the runtime, and
    time-driven progress is extrapolated to the time of the request.

    Args:
        job_id: Job id returned by enqueue
        job_service: Injected JobService

    Returns:
        JobStatusResponse: Current status, progress, message and timestamps

    Raises:
        HTTPException(404): Job not found or expired
        HTTPException(503): Status store unavailable

    Example Response:
        {
            "job_id": "1f0c7f3e-4a4b-4a43-9d59-6b8f8a0f3c21",
            "job_class": "ExportJob",
            "status": "working",
            "progress": 0.15,
            "message": "Gathering rows",
            "error": null,
            "args": {"rows": 10},
            "time_queued": 1767225600.0,
            "time_started": 1767225601.2,
            "time_ended": null
        }
    """
    try:
        record = job_service.get_status_info(job_id)
    except TransientStoreError as e:
        raise _store_unavailable(e)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Job {job_id} not found")
    return JobStatusResponse.from_record(record)


@router.post("/{job_id}/abort", status_code=status.HTTP_202_ACCEPTED)
def abort_job(
    job_id: str,
    job_service: JobService = Depends(get_job_service),
) -> dict:
    """
    Request cooperative cancellation.

    The job stops at its next checkpoint; jobs already finished are unaffected.
    """
    try:
        job_service.abort(job_id)
    except TransientStoreError as e:
        raise _store_unavailable(e)
    return {"job_id": job_id, "abort_requested": True}
