"""APScheduler setup and job registration."""

from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import settings
from app.jobs.journal_recovery import journal_recovery
from app.jobs.session_sweep import session_sweep

scheduler = AsyncIOScheduler(timezone=settings.timezone)


def register_jobs() -> None:
    """Register all periodic jobs if not already present."""
    if scheduler.get_job("session_sweep") is None:
        scheduler.add_job(
            session_sweep,
            CronTrigger(minute="*/15", timezone=settings.timezone),
            id="session_sweep",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

    if scheduler.get_job("journal_recovery") is None:
        scheduler.add_job(
            journal_recovery,
            CronTrigger(minute="*/5", timezone=settings.timezone),
            id="journal_recovery",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
