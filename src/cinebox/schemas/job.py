"""Pydantic schemas for scheduled job administration."""

from datetime import datetime

from pydantic import BaseModel


class JobInfo(BaseModel):
    """A registered scheduled job."""

    id: str
    name: str
    cron: str
    next_run_time: datetime | None = None


class JobRunResponse(BaseModel):
    status: str
    job_id: str


class MovieStatusRefreshResponse(BaseModel):
    updated: int
