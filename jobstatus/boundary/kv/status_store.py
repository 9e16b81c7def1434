"""
Status record persistence.

Load/save operations for StatusRecord plus the per-class job index and
per-job control flags, all on top of a KeyValueStore with a shared TTL.

Dependencies: pydantic, jobstatus.boundary.kv, jobstatus.models
System role: Status persistence operations for tracked jobs
"""

import logging

from pydantic import ValidationError

from jobstatus.boundary.kv.interface import KeyValueStore
from jobstatus.boundary.kv.keys import CONTROL_ABORT, KeySpace
from jobstatus.core.exceptions import StatusRecordDecodeError
from jobstatus.models.status_record import StatusRecord

logger = logging.getLogger(__name__)

CONTROL_SET = "1"


class StatusStore:
    """
    Persistence operations for job status.

    Saves overwrite the whole record and refresh its TTL; there are no
    partial-field updates and no explicit deletes.
    """

    def __init__(
        self,
        store: KeyValueStore,
        ttl_seconds: int,
        keys: KeySpace | None = None,
    ) -> None:
        """
        Initialize status store.

        Args:
            store: Underlying key-value store
            ttl_seconds: TTL applied to every key written
            keys: Key layout (defaults to unprefixed keys)
        """
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._keys = keys or KeySpace()

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def load(self, job_id: str) -> StatusRecord | None:
        """
        Fetch and decode a job's status record.

        Args:
            job_id: Job identifier

        Returns:
            StatusRecord if present, None if absent or expired

        Raises:
            StatusRecordDecodeError: Stored payload is not a valid record
            TransientStoreError: Store unavailable
        """
        payload = self._store.get(self._keys.status(job_id))
        if payload is None:
            return None
        try:
            return StatusRecord.from_json(payload)
        except ValidationError as e:
            raise StatusRecordDecodeError(job_id, {"cause": str(e)}) from e

    def save(self, record: StatusRecord) -> None:
        """Write a record wholesale, refreshing its TTL."""
        self._store.set(self._keys.status(record.job_id), record.to_json(), self._ttl_seconds)
        logger.debug(
            f"{__name__}:save - Saved status for job {record.job_id} "
            f"(status={record.status.value}, progress={record.progress:.3f})"
        )

    def append_to_class_index(self, job_class: str, job_id: str) -> None:
        self._store.list_append(self._keys.jobs_by_class(job_class), job_id, self._ttl_seconds)

    def list_class_index(self, job_class: str, limit: int) -> list[str]:
        """
        Return the most recent job ids of a class in insertion order.

        Args:
            job_class: Job class name
            limit: Maximum number of ids to return

        Returns:
            list[str]: Up to ``limit`` job ids, oldest first
        """
        if limit <= 0:
            return []
        return self._store.list_range(self._keys.jobs_by_class(job_class), -limit, -1)

    def set_control(self, job_id: str, name: str = CONTROL_ABORT) -> None:
        self._store.set(self._keys.control(job_id, name), CONTROL_SET, self._ttl_seconds)

    def get_control(self, job_id: str, name: str = CONTROL_ABORT) -> bool:
        return self._store.get(self._keys.control(job_id, name)) is not None

    def ping(self) -> bool:
        return self._store.ping()
