"""Community feed and local project service."""

from __future__ import annotations

import uuid

from app.schemas.community import (
    Comment,
    CommunityPost,
    LocalProject,
    PostCreate,
    PostType,
    ProjectCreate,
)
from app.schemas.request import CollectionRequest
from app.schemas.user import UserResponse
from app.services.common import RecordStore, is_organization
from app.services.repositories import PostRepository, ProjectRepository
from app.utils.errors import ForbiddenError
from app.utils.time import now_utc

SHARE_LABELS = {
    "Donate": ("🎁", "Estou doando"),
    "Sell": ("💰", "Estou vendendo"),
    "Discard": ("♻️", "Descarte disponível"),
}


class CommunityService:
    """Regional posts, comments, likes and projects."""

    def __init__(self, store: RecordStore) -> None:
        self.posts = PostRepository(store)
        self.projects = ProjectRepository(store)

    def list_posts(self, user: UserResponse) -> list[CommunityPost]:
        """Return posts from the user's region, newest first."""
        rows = [post for post in self.posts.all() if post.region == user.region]
        return sorted(rows, key=lambda post: post.created_at, reverse=True)

    def create_post(
        self,
        content: str,
        post_type: PostType,
        user: UserResponse,
        image_url: str | None = None,
    ) -> CommunityPost:
        """Publish a post in the author's region."""
        post = CommunityPost(
            id=uuid.uuid4().hex,
            author=user.name,
            author_id=user.id,
            content=content,
            type=post_type,
            region=user.region,
            image_url=image_url,
            created_at=now_utc(),
        )
        return self.posts.insert_first(post)

    def create_from_payload(self, payload: PostCreate, user: UserResponse) -> CommunityPost:
        return self.create_post(payload.content, payload.type, user, payload.image_url)

    def share_request(self, request: CollectionRequest, user: UserResponse) -> CommunityPost:
        """Publish a collection request as a feed tip."""
        if request.user_id != user.id:
            raise ForbiddenError("Only the request owner can share it")
        emoji, action_text = SHARE_LABELS.get(request.action_type, ("📦", "Disponível"))
        content = f"{emoji} {action_text}: {request.category}\n\n{request.description}\n\n📍 {user.region}"
        return self.create_post(content, "Tip", user, request.photo_url or None)

    def _regional_post(self, post_id: str, user: UserResponse) -> CommunityPost:
        post = self.posts.get(post_id)
        if post.region != user.region:
            raise ForbiddenError("Post belongs to another region")
        return post

    def toggle_like(self, post_id: str, user: UserResponse) -> CommunityPost:
        """Like the post, or remove the like if already given."""
        post = self._regional_post(post_id, user)
        if user.id in post.liked_by:
            liked_by = [uid for uid in post.liked_by if uid != user.id]
            likes = max(0, post.likes - 1)
        else:
            liked_by = [*post.liked_by, user.id]
            likes = post.likes + 1
        return self.posts.replace(post.model_copy(update={"liked_by": liked_by, "likes": likes}))

    def add_comment(self, post_id: str, content: str, user: UserResponse) -> Comment:
        post = self._regional_post(post_id, user)
        comment = Comment(id=uuid.uuid4().hex, author=user.name, content=content, created_at=now_utc())
        self.posts.replace(post.model_copy(update={"comments": [*post.comments, comment]}))
        return comment

    def list_projects(self, user: UserResponse) -> list[LocalProject]:
        return [project for project in self.projects.all() if project.region == user.region]

    def create_project(self, payload: ProjectCreate, user: UserResponse) -> LocalProject:
        """Create a project; the author joins it automatically."""
        project = LocalProject(
            id=uuid.uuid4().hex,
            author_id=user.id,
            author_name=user.name,
            region=user.region,
            participants=[user.id],
            created_at=now_utc(),
            **payload.model_dump(),
        )
        return self.projects.insert_first(project)

    def _regional_project(self, project_id: str, user: UserResponse) -> LocalProject:
        project = self.projects.get(project_id)
        if project.region != user.region:
            raise ForbiddenError("Project belongs to another region")
        return project

    def _ensure_project_manager(self, project: LocalProject, user: UserResponse) -> None:
        if project.author_id != user.id and not is_organization(user):
            raise ForbiddenError("Only the author or an administrator can manage this project")

    def delete_project(self, project_id: str, user: UserResponse) -> None:
        project = self._regional_project(project_id, user)
        self._ensure_project_manager(project, user)
        self.projects.remove(project_id)

    def toggle_participation(self, project_id: str, user: UserResponse) -> LocalProject:
        """Join the project, or leave it when already participating."""
        project = self._regional_project(project_id, user)
        if user.id in project.participants:
            participants = [uid for uid in project.participants if uid != user.id]
        else:
            participants = [*project.participants, user.id]
        return self.projects.replace(project.model_copy(update={"participants": participants}))

    def add_project_comment(self, project_id: str, content: str, user: UserResponse) -> LocalProject:
        project = self._regional_project(project_id, user)
        comment = Comment(id=uuid.uuid4().hex, author=user.name, content=content, created_at=now_utc())
        return self.projects.replace(
            project.model_copy(update={"comments": [*project.comments, comment]})
        )

    def remove_participant(
        self, project_id: str, target_user_id: str, user: UserResponse
    ) -> LocalProject:
        project = self._regional_project(project_id, user)
        self._ensure_project_manager(project, user)
        participants = [uid for uid in project.participants if uid != target_user_id]
        return self.projects.replace(project.model_copy(update={"participants": participants}))
