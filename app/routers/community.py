"""Community feed and local project endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_current_user, get_store
from app.schemas.community import CommentCreate, PostCreate, ProjectCreate
from app.schemas.user import UserResponse
from app.services.common import RecordStore
from app.services.community_service import CommunityService

router = APIRouter()


@router.get("/posts")
def list_posts(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Return posts from the caller's region, newest first."""
    return {"posts": CommunityService(store).list_posts(user)}


@router.post("/posts", status_code=201)
def create_post(
    payload: PostCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"post": CommunityService(store).create_from_payload(payload, user)}


@router.post("/posts/{post_id}/like")
def toggle_like(
    post_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"post": CommunityService(store).toggle_like(post_id, user)}


@router.post("/posts/{post_id}/comments", status_code=201)
def add_comment(
    post_id: str,
    payload: CommentCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"comment": CommunityService(store).add_comment(post_id, payload.content, user)}


@router.get("/projects")
def list_projects(
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"projects": CommunityService(store).list_projects(user)}


@router.post("/projects", status_code=201)
def create_project(
    payload: ProjectCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Create a project; the author joins it automatically."""
    return {"project": CommunityService(store).create_project(payload, user)}


@router.delete("/projects/{project_id}")
def delete_project(
    project_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    CommunityService(store).delete_project(project_id, user)
    return {"success": True}


@router.post("/projects/{project_id}/participation")
def toggle_participation(
    project_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    return {"project": CommunityService(store).toggle_participation(project_id, user)}


@router.post("/projects/{project_id}/comments", status_code=201)
def add_project_comment(
    project_id: str,
    payload: CommentCreate,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    project = CommunityService(store).add_project_comment(project_id, payload.content, user)
    return {"project": project}


@router.delete("/projects/{project_id}/participants/{participant_id}")
def remove_participant(
    project_id: str,
    participant_id: str,
    user: UserResponse = Depends(get_current_user),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Remove someone from a project; author or regional administrator only."""
    project = CommunityService(store).remove_participant(project_id, participant_id, user)
    return {"project": project}
