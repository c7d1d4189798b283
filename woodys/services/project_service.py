"""
Project service: publishing, editing and discovering projects.
"""
import logging
from typing import List, Optional

from woodys.db import models, schemas
from woodys.db.repositories import ProjectRepository, UserRepository
from woodys.errors import NotFoundError, UnauthorizedError, ValidationError
from woodys.utils.validation import normalize_pagination

logger = logging.getLogger(__name__)

TOP_RATED_MIN_RATINGS = 3


class ProjectService:
    def __init__(self, projects: ProjectRepository, users: UserRepository):
        self.projects = projects
        self.users = users

    def create_project(self, payload: schemas.ProjectCreate, caller_id: Optional[int]) -> models.Project:
        if caller_id is None:
            raise UnauthorizedError("an authenticated user is required to create a project")
        try:
            self.users.get(caller_id)
        except NotFoundError as exc:
            raise exc.with_context("failed to create project")
        project = models.Project(
            owner_id=caller_id,
            average_rating=0.0,
            rating_count=0,
            **payload.model_dump(),
        )
        created = self.projects.create(project)
        logger.info("project_created id=%s owner_id=%s", created.id, caller_id)
        return created

    def get_project(self, project_id: int) -> models.Project:
        return self.projects.get(project_id)

    def update_project(self, project_id: int, payload: schemas.ProjectUpdate, caller_id: Optional[int]) -> models.Project:
        project = self.projects.get(project_id)
        if not project.can_be_edited_by(caller_id):
            raise UnauthorizedError("only the project owner can update this project")
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(project, key, value)
        return self.projects.update(project)

    def delete_project(self, project_id: int, caller_id: Optional[int]) -> None:
        project = self.projects.get(project_id)
        if not project.can_be_deleted_by(caller_id):
            raise UnauthorizedError("only the project owner can delete this project")
        self.projects.delete(project_id)
        logger.info("project_deleted id=%s", project_id)

    def search_projects(self, filters: schemas.ProjectSearchFilters) -> List[models.Project]:
        limit, offset = normalize_pagination(filters.limit, filters.offset)
        if filters.max_time_to_build is not None and filters.max_time_to_build < 0:
            raise ValidationError("max_time_to_build", "max_time_to_build cannot be negative")
        if filters.min_rating is not None and not 0 <= filters.min_rating <= 5:
            raise ValidationError("min_rating", "min_rating must be between 0 and 5")
        return self.projects.search(filters.model_copy(update={"limit": limit, "offset": offset}))

    def search_by_title(self, query: str, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]:
        if not (query or "").strip():
            raise ValidationError("q", "search query is required")
        limit, offset = normalize_pagination(limit, offset)
        return self.projects.search_by_title(query.strip(), limit, offset)

    def list_projects(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]:
        limit, offset = normalize_pagination(limit, offset)
        return self.projects.list(limit, offset)

    def get_projects_by_owner(self, owner_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]:
        limit, offset = normalize_pagination(limit, offset)
        self.users.get(owner_id)
        return self.projects.list_by_owner(owner_id, limit, offset)

    def get_popular_projects(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]:
        limit, offset = normalize_pagination(limit, offset)
        return self.projects.list_popular(limit, offset)

    def get_recent_projects(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]:
        limit, offset = normalize_pagination(limit, offset)
        return self.projects.list_recent(limit, offset)

    def get_top_rated_projects(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]:
        """Best average first, among projects with at least three ratings."""
        limit, offset = normalize_pagination(limit, offset)
        return self.projects.list_top_rated(TOP_RATED_MIN_RATINGS, limit, offset)
