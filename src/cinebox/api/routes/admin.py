"""Admin API endpoints for manual operations."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cinebox.database import get_db
from cinebox.schemas import (
    BookingStatusResponse,
    BookingSummary,
    JobInfo,
    JobRunResponse,
    MovieStatusRefreshResponse,
    OccupiedSeatsResponse,
)
from cinebox.services.booking_lifecycle import BookingLifecycle
from cinebox.services.movie_status import force_update_all_statuses
from cinebox.services.queries import get_booking_summary, get_occupied_seat_ids
from cinebox.tasks.scheduler import get_scheduled_job, scheduled_jobs

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/admin/movies/refresh-status", response_model=MovieStatusRefreshResponse)
async def refresh_movie_statuses(
    db: AsyncSession = Depends(get_db),
) -> MovieStatusRefreshResponse:
    """
    Recompute and rewrite the status of every movie immediately.

    Unlike the daily job this rewrites movies whose status did not change,
    so the returned count is always the total number of movies.
    """
    updated = await force_update_all_statuses(db)
    return MovieStatusRefreshResponse(updated=updated)


@router.get("/admin/jobs", response_model=list[JobInfo])
async def list_jobs(request: Request) -> list[JobInfo]:
    """List the registered background jobs and when they next run."""
    scheduler = getattr(request.app.state, "scheduler", None)

    jobs: list[JobInfo] = []
    for job in scheduled_jobs():
        next_run_time = None
        if scheduler is not None:
            scheduled = scheduler.get_job(job.id)
            # Jobs have no next_run_time until the scheduler has started
            next_run_time = getattr(scheduled, "next_run_time", None)
        jobs.append(
            JobInfo(id=job.id, name=job.name, cron=job.cron, next_run_time=next_run_time)
        )
    return jobs


@router.post("/admin/jobs/{job_id}/run", response_model=JobRunResponse)
async def run_job(job_id: str, background_tasks: BackgroundTasks) -> JobRunResponse:
    """Trigger one background job outside its schedule.

    Returns immediately; the job runs asynchronously and reports only to logs.
    """
    job = get_scheduled_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail=f"Unknown job: {job_id}")

    logger.info(f"Manual run of job {job_id!r} requested")
    background_tasks.add_task(job.func)
    return JobRunResponse(status="started", job_id=job_id)


@router.get(
    "/admin/showtimes/{showtime_id}/occupied-seats",
    response_model=OccupiedSeatsResponse,
)
async def occupied_seats(
    showtime_id: int,
    db: AsyncSession = Depends(get_db),
) -> OccupiedSeatsResponse:
    seat_ids = await get_occupied_seat_ids(db, showtime_id)
    return OccupiedSeatsResponse(showtime_id=showtime_id, seat_ids=seat_ids)


@router.get("/admin/bookings/{booking_id}", response_model=BookingSummary)
async def booking_summary(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
) -> BookingSummary:
    summary = await get_booking_summary(db, booking_id)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"Booking {booking_id} not found")
    return summary


@router.post("/admin/bookings/{booking_id}/confirm", response_model=BookingStatusResponse)
async def confirm_booking(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
) -> BookingStatusResponse:
    """
    Confirm a PENDING booking, e.g. after an offline payment.

    Returns 410 if the hold lapsed first; the booking is expired in that case.
    """
    booking = await BookingLifecycle(db).confirm(booking_id)
    return BookingStatusResponse.model_validate(booking)


@router.post("/admin/bookings/{booking_id}/cancel", response_model=BookingStatusResponse)
async def cancel_booking(
    booking_id: int,
    reason: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> BookingStatusResponse:
    booking = await BookingLifecycle(db).cancel(booking_id, reason=reason)
    return BookingStatusResponse.model_validate(booking)
