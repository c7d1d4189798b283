from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ProjectBase(BaseModel):
    title: str
    description: str = ""
    tutorial: str = ""
    materials: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    style: list[str] = Field(default_factory=list)
    environment: list[str] = Field(default_factory=list)
    portrait: str = ""
    images: list[str] = Field(default_factory=list)
    time_to_build: int = 0


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    """Partial update; fields left unset are not touched.

    The rating aggregate is derived and therefore not accepted here.
    """

    title: str | None = None
    description: str | None = None
    tutorial: str | None = None
    materials: list[str] | None = None
    tools: list[str] | None = None
    style: list[str] | None = None
    environment: list[str] | None = None
    portrait: str | None = None
    images: list[str] | None = None
    time_to_build: int | None = None


class Project(ProjectBase):
    id: int
    owner_id: int
    average_rating: float
    rating_count: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ProjectSearchFilters(BaseModel):
    """Search criteria; set-valued filters require every listed value to be present."""

    q: str | None = None
    style: list[str] = Field(default_factory=list)
    environment: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    max_time_to_build: int | None = None
    min_rating: float | None = None
    limit: int | None = None
    offset: int | None = None
