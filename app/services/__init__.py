"""Service package exports with lazy loading."""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS = {
    "AlertService": "app.services.alert_service",
    "AssistantService": "app.services.assistant_service",
    "AuthService": "app.services.auth_service",
    "ChallengeService": "app.services.challenge_service",
    "CollectionPointService": "app.services.collection_point_service",
    "CommunityService": "app.services.community_service",
    "JournalService": "app.services.journal_service",
    "LeaderboardService": "app.services.leaderboard_service",
    "LedgerService": "app.services.ledger_service",
    "LocationService": "app.services.location_service",
    "MemoryRecordStore": "app.services.common",
    "RecordStore": "app.services.common",
    "Repository": "app.services.common",
    "RequestService": "app.services.request_service",
    "RewardService": "app.services.reward_service",
    "ScheduleService": "app.services.schedule_service",
    "SupabaseRecordStore": "app.services.common",
}

__all__ = sorted(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module = import_module(_EXPORTS[name])
    return getattr(module, name)
