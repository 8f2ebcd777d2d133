"""Tests for scheduler job registration and cron timing."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from cinebox.config import settings
from cinebox.tasks.booking_expiry_job import run_booking_expiry
from cinebox.tasks.scheduler import create_scheduler, get_scheduled_job, scheduled_jobs

TZ = ZoneInfo("Asia/Ho_Chi_Minh")
START = datetime(2026, 10, 19, 12, 30, 15, tzinfo=TZ)


@pytest.fixture
def scheduler():
    return create_scheduler("Asia/Ho_Chi_Minh")


def next_fire(scheduler, job_id: str) -> datetime:
    job = scheduler.get_job(job_id)
    return job.trigger.get_next_fire_time(None, START)


class TestCreateScheduler:
    def test_registers_all_jobs(self, scheduler):
        job_ids = {job.id for job in scheduler.get_jobs()}
        assert job_ids == {"booking_expiry", "movie_status", "voucher_expiry", "coupon_expiry"}

    def test_jobs_never_overlap(self, scheduler):
        for job in scheduler.get_jobs():
            assert job.max_instances == 1
            assert job.coalesce is True

    def test_scheduler_not_started(self, scheduler):
        assert scheduler.running is False

    def test_booking_expiry_runs_every_minute(self, scheduler):
        assert next_fire(scheduler, "booking_expiry") == datetime(2026, 10, 19, 12, 31, tzinfo=TZ)

    def test_movie_status_runs_after_midnight(self, scheduler):
        assert next_fire(scheduler, "movie_status") == datetime(2026, 10, 20, 0, 5, tzinfo=TZ)

    def test_voucher_expiry_runs_after_midnight(self, scheduler):
        assert next_fire(scheduler, "voucher_expiry") == datetime(2026, 10, 20, 0, 1, tzinfo=TZ)

    def test_coupon_expiry_runs_hourly(self, scheduler):
        assert next_fire(scheduler, "coupon_expiry") == datetime(2026, 10, 19, 13, 1, tzinfo=TZ)

    def test_cron_read_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "booking_expiry_cron", "*/5 * * * *")

        scheduler = create_scheduler("Asia/Ho_Chi_Minh")

        assert next_fire(scheduler, "booking_expiry") == datetime(2026, 10, 19, 12, 35, tzinfo=TZ)


class TestScheduledJobs:
    def test_lookup_by_id(self):
        job = get_scheduled_job("booking_expiry")
        assert job is not None
        assert job.func is run_booking_expiry
        assert job.cron == settings.booking_expiry_cron

    def test_unknown_job(self):
        assert get_scheduled_job("nightly_backup") is None

    def test_job_ids_are_unique(self):
        ids = [job.id for job in scheduled_jobs()]
        assert len(ids) == len(set(ids))
