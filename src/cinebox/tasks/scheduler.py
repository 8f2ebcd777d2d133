"""Registration of the recurring background jobs."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, NamedTuple

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from cinebox.config import settings
from cinebox.tasks.booking_expiry_job import run_booking_expiry
from cinebox.tasks.movie_status_job import run_movie_status_update
from cinebox.tasks.promotion_expiry_job import run_coupon_expiry, run_voucher_expiry

logger = logging.getLogger(__name__)


class ScheduledJob(NamedTuple):
    id: str
    name: str
    func: Callable[[], Awaitable[Any]]
    cron: str


def scheduled_jobs() -> list[ScheduledJob]:
    """Jobs to register, with cron expressions read from settings."""
    return [
        ScheduledJob(
            id="booking_expiry",
            name="Expire lapsed booking holds",
            func=run_booking_expiry,
            cron=settings.booking_expiry_cron,
        ),
        ScheduledJob(
            id="movie_status",
            name="Recompute movie statuses",
            func=run_movie_status_update,
            cron=settings.movie_status_cron,
        ),
        ScheduledJob(
            id="voucher_expiry",
            name="Expire vouchers",
            func=run_voucher_expiry,
            cron=settings.voucher_expiry_cron,
        ),
        ScheduledJob(
            id="coupon_expiry",
            name="Expire coupons",
            func=run_coupon_expiry,
            cron=settings.coupon_expiry_cron,
        ),
    ]


def get_scheduled_job(job_id: str) -> ScheduledJob | None:
    for job in scheduled_jobs():
        if job.id == job_id:
            return job
    return None


def create_scheduler(timezone: str | None = None) -> AsyncIOScheduler:
    """
    Build a scheduler with every job registered but not started.

    Each job gets its own cron trigger. max_instances=1 skips a tick while
    the previous run of the same job is still going; coalesce=True folds
    ticks missed while the process was busy into a single run.
    """
    tz = timezone or settings.timezone
    scheduler = AsyncIOScheduler(timezone=tz)

    for job in scheduled_jobs():
        scheduler.add_job(
            job.func,
            trigger=CronTrigger.from_crontab(job.cron, timezone=tz),
            id=job.id,
            name=job.name,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.debug(f"Registered job {job.id!r} with cron {job.cron!r}")

    return scheduler
