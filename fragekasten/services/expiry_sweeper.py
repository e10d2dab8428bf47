"""
Expiry sweeper: periodically purges expired questions.

Started once from the application lifespan and cancelled at shutdown.
A failed sweep is logged and retried after the normal interval.
"""

import asyncio
import logging
import time
from typing import Optional

from fragekasten.core.async_utils import run_sync
from fragekasten.services.question_store import QuestionStore

logger = logging.getLogger(__name__)

SWEEP_INTERVAL_SECONDS = 60


async def sweep_expired_questions(store: QuestionStore, now: Optional[int] = None) -> Optional[int]:
    """Run one sweep. Returns the number of removed questions, or None on failure."""
    if now is None:
        now = int(time.time())

    logger.debug("Running question expiry check")
    try:
        removed = await run_sync(store.delete_expired, now)
    except Exception as exc:
        # The loop must survive storage failures; next cycle retries.
        logger.warning("Expiry check failed to remove expired questions: %s", exc)
        return None

    logger.debug("Expiry check removed %d expired questions", removed)
    return removed


async def expiry_sweeper_loop(store: QuestionStore, interval: float = SWEEP_INTERVAL_SECONDS) -> None:
    """Sweep immediately, then every *interval* seconds until cancelled."""
    while True:
        await sweep_expired_questions(store)
        await asyncio.sleep(interval)
