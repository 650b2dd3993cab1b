"""Expired session sweep job."""

from __future__ import annotations

import logging

from app.services.auth_service import AuthService
from app.utils.supabase_client import get_record_store

logger = logging.getLogger(__name__)


async def session_sweep() -> None:
    """Delete sessions past their absolute expiry."""
    removed = AuthService(get_record_store()).sweep_expired_sessions()
    logger.info("session_sweep completed with %s expired sessions removed", removed)
