"""
Store key layout.

    status:<job_id>            serialized StatusRecord
    control:<job_id>:<name>    control flag (currently only abort)
    jobs-by-class:<job_class>  ordered list of job ids

An optional prefix namespaces every key.

Dependencies: None
System role: Key naming for the status store
"""

CONTROL_ABORT = "abort"


class KeySpace:
    """Builds store keys under an optional prefix."""

    def __init__(self, prefix: str = "") -> None:
        self._prefix = f"{prefix}:" if prefix and not prefix.endswith(":") else prefix

    def status(self, job_id: str) -> str:
        return f"{self._prefix}status:{job_id}"

    def control(self, job_id: str, name: str) -> str:
        return f"{self._prefix}control:{job_id}:{name}"

    def jobs_by_class(self, job_class: str) -> str:
        return f"{self._prefix}jobs-by-class:{job_class}"
