"""Community post, project, alert and schedule schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

PostType = Literal["Alert", "Project", "Tip"]
AlertType = Literal["info", "warning", "critical"]
WasteType = Literal["Reciclável", "Orgânico", "Vidro", "Geral"]


class Comment(BaseModel):
    """Comment on a post or project."""

    id: str
    author: str
    content: str
    created_at: datetime


class CommentCreate(BaseModel):
    """Request body for commenting."""

    content: str = Field(..., min_length=1)


class CommunityPost(BaseModel):
    """Regional feed post."""

    id: str
    author: str
    author_id: str | None = None
    content: str
    likes: int = 0
    liked_by: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    type: PostType = "Tip"
    region: str
    image_url: str | None = None
    is_sponsored: bool = False
    created_at: datetime


class PostCreate(BaseModel):
    """Request body for publishing a post."""

    content: str = Field(..., min_length=1)
    type: PostType = "Tip"
    image_url: str | None = None


class LocalProject(BaseModel):
    """Neighbourhood project residents can join."""

    id: str
    title: str
    description: str = ""
    author_id: str
    author_name: str
    region: str
    date: str = ""
    location: str = ""
    participants: list[str] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    created_at: datetime


class ProjectCreate(BaseModel):
    """Request body for creating a project."""

    title: str = Field(..., min_length=1)
    description: str = ""
    date: str = ""
    location: str = ""


class Alert(BaseModel):
    """Administrator notice broadcast to one region."""

    id: str
    title: str
    message: str
    type: AlertType = "info"
    created_at: datetime
    created_by: str
    region: str


class AlertCreate(BaseModel):
    """Request body for creating an alert."""

    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: AlertType = "info"


class AlertUpdate(BaseModel):
    """Editable alert fields."""

    model_config = {"extra": "forbid"}

    title: str | None = Field(default=None, min_length=1)
    message: str | None = Field(default=None, min_length=1)
    type: AlertType | None = None


class CollectionSchedule(BaseModel):
    """Weekly collection slot for a region."""

    id: str
    day_of_week: str
    start_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    waste_type: WasteType
    sector: str = ""
    region: str


class ScheduleCreate(BaseModel):
    """Request body for creating a schedule slot."""

    day_of_week: str
    start_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    waste_type: WasteType
    sector: str = ""


class ScheduleUpdate(BaseModel):
    """Editable schedule fields."""

    model_config = {"extra": "forbid"}

    day_of_week: str | None = None
    start_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    end_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    waste_type: WasteType | None = None
    sector: str | None = None


class NextCollection(BaseModel):
    """Earliest upcoming collection slot."""

    day_label: str
    time_range: str
    waste_type: str
    sector: str
