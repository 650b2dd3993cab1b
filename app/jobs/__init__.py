"""Background job modules for periodic reColeta maintenance."""

from app.jobs.journal_recovery import journal_recovery
from app.jobs.session_sweep import session_sweep

__all__ = [
    "journal_recovery",
    "session_sweep",
]
