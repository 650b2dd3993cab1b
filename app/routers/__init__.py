"""API router package."""

from app.routers import (
    alerts,
    assistant,
    auth,
    collection_points,
    community,
    gamification,
    location,
    requests,
    schedules,
    users,
)

__all__ = [
    "alerts",
    "assistant",
    "auth",
    "collection_points",
    "community",
    "gamification",
    "location",
    "requests",
    "schedules",
    "users",
]
