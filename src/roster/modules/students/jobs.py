"""
Students Background Jobs

Annual rollover: once a year, in the configured month, every student enrolled
in the current calendar year gets servicePayed and annualPayed reset to 0 and
the academic session reopened.

Design Principles:
- The check runs on an interval (daily by default) for as long as the process is up
- A rollover is applied at most once per calendar year per process; the guard
  is in memory, so a process that is down for the whole month skips that year
- Each record is reset in its own session; one failure does not stop the rest
- No locking against live updates: a concurrent edit and the reset race and
  the last write wins

No endpoint triggers the rollover.
"""

import enum
import logging
from datetime import UTC, datetime
from zoneinfo import ZoneInfo
from typing import Any

from apscheduler.triggers.interval import IntervalTrigger

from roster.core.config import settings
from roster.core.database import async_session_maker
from roster.core.scheduler import register_job
from roster.modules.students import repository

logger = logging.getLogger(__name__)

JOB_ID_ANNUAL_ROLLOVER = "students_annual_rollover"


class RolloverState(str, enum.Enum):
    """Rollover engine state."""

    IDLE = "idle"
    APPLYING = "applying"


async def _reset_student(student_id: str) -> dict[str, Any]:
    """Reset one student in its own session."""
    async with async_session_maker() as db:
        student = await repository.get_by_id(db, student_id)
        if student is None:
            return {"student_id": student_id, "status": "skipped", "reason": "not_found"}

        await repository.reset_for_new_year(db, student)

    return {"student_id": student_id, "status": "reset"}


async def apply_rollover(year: int) -> dict[str, Any]:
    """
    Reset payment counters for every student of the given year.

    Args:
        year: Academic year whose students are rolled over

    Returns:
        Summary with executed_at, year, total_reset, total_errors and
        per-record results
    """
    executed_at = datetime.now(UTC)

    logger.info(f"Starting annual rollover for year {year}")

    results: dict[str, Any] = {
        "executed_at": executed_at.isoformat(),
        "year": year,
        "results": [],
        "total_reset": 0,
        "total_errors": 0,
    }

    async with async_session_maker() as db:
        students = await repository.list_by_year(db, year)
        student_ids = [student.id for student in students]

    logger.info(f"Found {len(student_ids)} students to roll over")

    for student_id in student_ids:
        try:
            result = await _reset_student(student_id)
            results["results"].append(result)
            if result["status"] == "reset":
                results["total_reset"] += 1
        except Exception as e:
            logger.error(f"Error rolling over student {student_id}: {e}", exc_info=True)
            results["results"].append(
                {
                    "student_id": student_id,
                    "status": "error",
                    "error": str(e),
                }
            )
            results["total_errors"] += 1

    logger.info(
        f"Annual rollover for {year} completed. "
        f"Reset: {results['total_reset']}, Errors: {results['total_errors']}"
    )

    return results


class AnnualRollover:
    """
    Time-driven rollover engine.

    tick() is called by the scheduler. It moves IDLE -> APPLYING -> IDLE when
    the current month is the rollover month and the current year has not
    been applied yet by this process. Month and year are read in the
    configured scheduler timezone.
    """

    def __init__(self, rollover_month: int, timezone: str = "UTC"):
        if not 1 <= rollover_month <= 12:
            raise ValueError(f"rollover_month must be 1-12, got {rollover_month}")
        self.rollover_month = rollover_month
        self.timezone = ZoneInfo(timezone)
        self.state = RolloverState.IDLE
        self.last_applied_year: int | None = None

    def is_due(self, now: datetime) -> bool:
        return now.month == self.rollover_month and self.last_applied_year != now.year

    async def tick(self, now: datetime | None = None) -> dict[str, Any] | None:
        """
        Run one scheduled check.

        Returns:
            The rollover summary when a rollover was applied, otherwise None
        """
        now = now or datetime.now(self.timezone)

        if self.state is RolloverState.APPLYING:
            logger.warning("Rollover already in progress, skipping tick")
            return None

        if not self.is_due(now):
            logger.debug(f"Rollover not due at {now.isoformat()}")
            return None

        self.state = RolloverState.APPLYING
        try:
            summary = await apply_rollover(now.year)
            self.last_applied_year = now.year
            return summary
        finally:
            self.state = RolloverState.IDLE


annual_rollover = AnnualRollover(settings.rollover_month, settings.scheduler_timezone)


async def run_annual_rollover() -> None:
    """Scheduled entry point."""
    await annual_rollover.tick()


def register_student_jobs() -> None:
    """
    Register the student background jobs with the scheduler.

    Call during application startup, before the scheduler is started.
    """
    interval_hours = settings.rollover_check_interval_hours

    register_job(
        job_id=JOB_ID_ANNUAL_ROLLOVER,
        func=run_annual_rollover,
        trigger=IntervalTrigger(hours=interval_hours),
    )
    logger.info(f"Registered job: {JOB_ID_ANNUAL_ROLLOVER} (interval: {interval_hours} hours)")
