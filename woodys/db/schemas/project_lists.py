from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ProjectListCreate(BaseModel):
    name: str
    is_public: bool = False


class ProjectListUpdate(BaseModel):
    name: str | None = None
    is_public: bool | None = None


class ProjectList(BaseModel):
    id: int
    user_id: int
    name: str
    is_public: bool
    created_at: datetime
    updated_at: datetime
    project_count: int = 0
    model_config = ConfigDict(from_attributes=True)


class ProjectListProject(BaseModel):
    """Summary of a project as it appears inside a list."""

    id: int
    title: str
    portrait: str
    average_rating: float
    rating_count: int
    added_at: datetime


class ProjectListDetail(ProjectList):
    projects: list[ProjectListProject] = Field(default_factory=list)


class ProjectListItemCreate(BaseModel):
    project_id: int


class ProjectListMembership(BaseModel):
    project_list_id: int
    project_id: int
    in_list: bool
