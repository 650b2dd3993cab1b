"""Redemption journal recovery job."""

from __future__ import annotations

import logging

from app.services.journal_service import JournalService
from app.utils.supabase_client import get_record_store

logger = logging.getLogger(__name__)


async def journal_recovery() -> None:
    """Finish redemption deliveries interrupted between their writes."""
    recovered = JournalService(get_record_store()).recover()
    if recovered:
        logger.warning("journal_recovery rolled forward %s open entries", recovered)
    else:
        logger.info("journal_recovery found no open entries")
