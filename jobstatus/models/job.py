"""
Job API schemas.

Request/response schemas for the job status HTTP API.

Dependencies: pydantic, jobstatus.models.status_record
System role: Job status API contracts
"""

from typing import Any

from pydantic import BaseModel, Field

from jobstatus.models.status_record import JobStatus, StatusRecord


class EnqueueRequest(BaseModel):
    """Request schema for enqueueing a tracked job."""

    job_class: str = Field(min_length=1, description="Registered job class name")
    args: dict[str, Any] = Field(default_factory=dict, description="JSON job arguments")
    queue_name: str | None = Field(default=None, description="Target queue (defaults to configured queue)")


class EnqueueResponse(BaseModel):
    """Response schema for an enqueued job."""

    job_id: str


class JobStatusResponse(BaseModel):
    """Response schema for job status."""

    job_id: str
    job_class: str
    status: JobStatus
    progress: float = Field(description="Overall progress in [0, 1]")
    message: str | None = None
    error: str | None = None
    args: dict[str, Any] = Field(default_factory=dict)
    time_queued: float | None = None
    time_started: float | None = None
    time_ended: float | None = None

    @classmethod
    def from_record(cls, record: StatusRecord) -> "JobStatusResponse":
        """Build the public view of a record; transient part fields are omitted."""
        return cls(
            job_id=record.job_id,
            job_class=record.job_class,
            status=record.status,
            progress=record.progress,
            message=record.message,
            error=record.error,
            args=record.args,
            time_queued=record.time_queued,
            time_started=record.time_started,
            time_ended=record.time_ended,
        )


class JobListResponse(BaseModel):
    """Response schema for listing jobs by class."""

    job_class: str
    job_ids: list[str]
