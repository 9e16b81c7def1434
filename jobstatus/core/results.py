"""
Job body results.

A job body returns one of Ok, Aborted or Failed (or None, meaning Ok).
The lifecycle controller matches on the result to pick the terminal state.

Dependencies: dataclasses (stdlib)
System role: Tagged result type for job bodies
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Ok:
    """Job finished; value is returned to the runtime as the task result."""

    value: Any = None


@dataclass(frozen=True)
class Aborted:
    """Job stopped cooperatively."""

    reason: str | None = None
    exception: BaseException | None = None


@dataclass(frozen=True)
class Failed:
    """Job failed; exception is the original error when the body raised."""

    error: str
    exception: BaseException | None = None


JobResult = Union[Ok, Aborted, Failed]


def describe_error(exc: BaseException) -> str:
    """Short error description stored on FAILED records."""
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
