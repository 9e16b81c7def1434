"""
Example tracked jobs.

Small jobs used by local runs and the end-to-end tests to exercise
weighted parts, iteration reporting and time-driven extrapolation.

Dependencies: jobstatus.core, jobstatus.workers.registry
System role: Reference job implementations
"""

import time
from typing import Any

from jobstatus.core.job_context import JobContext
from jobstatus.workers.registry import job_registry


@job_registry.register()
class ExportJob:
    """
    Two-part export: gather rows (30%), then write them (70%).

    Args read from ctx.args:
        rows: Number of rows to export (default 10)
    """

    def run(self, ctx: JobContext) -> dict[str, Any]:
        rows = int(ctx.args.get("rows", 10))

        ctx.next_part(0.3, message="Gathering rows")
        gathered = [row for row in ctx.iterate(range(rows))]

        ctx.next_part(0.7, message="Writing rows")
        written = 0
        for _ in ctx.iterate(gathered):
            written += 1

        return {"rows_written": written}


@job_registry.register()
class SleepJob:
    """Waits for args["seconds"], reporting time-extrapolated progress."""

    def run(self, ctx: JobContext) -> None:
        seconds = float(ctx.args.get("seconds", 5))
        step = float(ctx.args.get("step", 0.25))

        ctx.next_part(1.0, expected_seconds=seconds, message=f"Sleeping {seconds}s")
        deadline = time.monotonic() + seconds
        while time.monotonic() < deadline:
            ctx.checkpoint()
            time.sleep(step)
