"""Scheduled job that recomputes movie statuses."""

import logging

from cinebox.database import AsyncSessionLocal
from cinebox.services.movie_status import update_movie_statuses
from cinebox.tasks.guard import skip_if_running
from cinebox.utils.dates import local_today

logger = logging.getLogger(__name__)


@skip_if_running
async def run_movie_status_update() -> int:
    """Persist status changes for movies whose release window moved on."""
    logger.info("Starting scheduled movie status update")

    async with AsyncSessionLocal() as db:
        try:
            updated = await update_movie_statuses(db, local_today())
            await db.commit()
        except Exception as e:
            logger.error(f"Movie status update failed: {e}", exc_info=True)
            await db.rollback()
            return 0

    return updated
