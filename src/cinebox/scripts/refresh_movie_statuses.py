"""Force-refresh every movie's status from its release date.

Usage:
    python -m cinebox.scripts.refresh_movie_statuses
    python -m cinebox.scripts.refresh_movie_statuses --today 2026-03-01
"""

import argparse
import asyncio
import logging
from datetime import date

from cinebox.database import AsyncSessionLocal
from cinebox.services.movie_status import force_update_all_statuses
from cinebox.utils.dates import local_today

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


async def refresh(today: date) -> int:
    async with AsyncSessionLocal() as db:
        updated = await force_update_all_statuses(db, today)
        await db.commit()
    logger.info(f"Done: rewrote status for {updated} movies as of {today}")
    return updated


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Evaluate statuses as of this date (YYYY-MM-DD, default: today)",
    )
    args = parser.parse_args()
    asyncio.run(refresh(args.today or local_today()))


if __name__ == "__main__":
    main()
