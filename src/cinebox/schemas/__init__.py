"""Pydantic schemas for API requests and responses."""

from cinebox.schemas.booking import BookingStatusResponse, BookingSummary, OccupiedSeatsResponse
from cinebox.schemas.job import JobInfo, JobRunResponse, MovieStatusRefreshResponse

__all__ = [
    "BookingStatusResponse",
    "BookingSummary",
    "JobInfo",
    "JobRunResponse",
    "MovieStatusRefreshResponse",
    "OccupiedSeatsResponse",
]
