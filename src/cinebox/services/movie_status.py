"""Movie status derivation from release date."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from cinebox.config import settings
from cinebox.models.movie import Movie, MovieStatus
from cinebox.utils.dates import add_months, local_today

logger = logging.getLogger(__name__)


def calculate_status(
    release_date: date | None,
    today: date,
    now_showing_months: int | None = None,
) -> MovieStatus:
    """
    Derive a movie's status from its release date.

    Rules, checked in order:
    - no release date, or release date after today: COMING_SOON
    - release date plus the showing window (2 months) after today: NOW_SHOWING
    - otherwise: ENDED

    Month arithmetic clamps to the end of the month, so a film released on
    Dec 31 stays NOW_SHOWING until the last day of February.
    """
    if now_showing_months is None:
        now_showing_months = settings.movie_now_showing_months

    if release_date is None or release_date > today:
        return MovieStatus.COMING_SOON
    if add_months(release_date, now_showing_months) > today:
        return MovieStatus.NOW_SHOWING
    return MovieStatus.ENDED


async def _all_movies(db: AsyncSession) -> list[Movie]:
    result = await db.execute(select(Movie).order_by(Movie.id))
    return list(result.scalars().all())


async def update_movie_statuses(db: AsyncSession, today: date | None = None) -> int:
    """
    Recompute every movie's status and persist the ones that changed.

    Returns:
        Number of movies whose status changed
    """
    today = today or local_today()
    logger.info(f"Updating movie statuses for {today}")

    updated = 0
    for movie in await _all_movies(db):
        new_status = calculate_status(movie.release_date, today)
        if movie.status != new_status:
            old_status = movie.status
            movie.status = new_status
            updated += 1
            logger.debug(f"Updated movie {movie.title!r}: {old_status.value} -> {new_status.value}")

    await db.flush()
    logger.info(f"Movie status update completed, {updated} movies changed")
    return updated


async def force_update_all_statuses(db: AsyncSession, today: date | None = None) -> int:
    """
    Recompute and rewrite the status of every movie, changed or not.

    Used by administrators to refresh the catalog outside the daily schedule.

    Returns:
        Total number of movies rewritten
    """
    today = today or local_today()
    logger.info(f"Force updating all movie statuses for {today}")

    movies = await _all_movies(db)
    for movie in movies:
        movie.status = calculate_status(movie.release_date, today)
        # Emit the UPDATE even when the value is unchanged
        flag_modified(movie, "status")

    await db.flush()
    logger.info(f"Force update completed, {len(movies)} movies rewritten")
    return len(movies)
