"""
Project list service: user-curated, optionally public collections.
"""
import logging
from typing import List, Optional

from woodys.db import models, schemas
from woodys.db.repositories import ProjectListRepository, ProjectRepository, UserRepository
from woodys.errors import ConflictError, UnauthorizedError
from woodys.utils.validation import normalize_pagination

logger = logging.getLogger(__name__)


def _summary(project_list: models.ProjectList, project_count: int) -> schemas.ProjectList:
    return schemas.ProjectList.model_validate(project_list, from_attributes=True).model_copy(
        update={"project_count": project_count}
    )


class ProjectListService:
    def __init__(self, project_lists: ProjectListRepository, projects: ProjectRepository, users: UserRepository):
        self.project_lists = project_lists
        self.projects = projects
        self.users = users

    def _owned_list(self, list_id: int, caller_id: Optional[int], action: str) -> models.ProjectList:
        project_list = self.project_lists.get(list_id)
        if not project_list.can_be_edited_by(caller_id):
            raise UnauthorizedError(f"only the list owner can {action}")
        return project_list

    def _with_counts(self, lists: List[models.ProjectList]) -> List[schemas.ProjectList]:
        counts = self.project_lists.item_counts(pl.id for pl in lists)
        return [_summary(pl, counts.get(pl.id, 0)) for pl in lists]

    def create_project_list(self, payload: schemas.ProjectListCreate, caller_id: Optional[int]) -> models.ProjectList:
        if caller_id is None:
            raise UnauthorizedError("an authenticated user is required to create a project list")
        self.users.get(caller_id)
        project_list = models.ProjectList(user_id=caller_id, name=payload.name, is_public=payload.is_public)
        created = self.project_lists.create(project_list)
        logger.info("project_list_created id=%s user_id=%s", created.id, caller_id)
        return created

    def get_project_list(self, list_id: int, caller_id: Optional[int]) -> schemas.ProjectListDetail:
        project_list = self.project_lists.get(list_id)
        if not project_list.can_be_accessed_by(caller_id):
            raise UnauthorizedError("this project list is private")
        projects = [
            schemas.ProjectListProject(
                id=project.id,
                title=project.title,
                portrait=project.portrait or "",
                average_rating=project.average_rating or 0.0,
                rating_count=project.rating_count or 0,
                added_at=added_at,
            )
            for project, added_at in self.project_lists.list_projects(list_id)
        ]
        base = _summary(project_list, len(projects))
        return schemas.ProjectListDetail(**base.model_dump(), projects=projects)

    def get_user_project_lists(
        self,
        user_id: int,
        caller_id: Optional[int],
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[schemas.ProjectList]:
        """Lists owned by ``user_id`` that ``caller_id`` may see."""
        limit, offset = normalize_pagination(limit, offset)
        self.users.get(user_id)
        lists = self.project_lists.list_by_user(user_id, public_only=caller_id != user_id, limit=limit, offset=offset)
        return self._with_counts(lists)

    def get_public_project_lists(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[schemas.ProjectList]:
        limit, offset = normalize_pagination(limit, offset)
        return self._with_counts(self.project_lists.list_public(limit, offset))

    def update_project_list(self, list_id: int, payload: schemas.ProjectListUpdate, caller_id: Optional[int]) -> models.ProjectList:
        project_list = self._owned_list(list_id, caller_id, "update this list")
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(project_list, key, value)
        return self.project_lists.update(project_list)

    def delete_project_list(self, list_id: int, caller_id: Optional[int]) -> None:
        self._owned_list(list_id, caller_id, "delete this list")
        self.project_lists.delete(list_id)
        logger.info("project_list_deleted id=%s", list_id)

    def add_project_to_list(self, list_id: int, project_id: int, caller_id: Optional[int]) -> models.ProjectListItem:
        self._owned_list(list_id, caller_id, "add projects")
        self.projects.get(project_id)
        if self.project_lists.is_project_in_list(list_id, project_id):
            raise ConflictError(f"project {project_id} is already in project list {list_id}")
        item = self.project_lists.add_project(list_id, project_id)
        logger.info("project_list_item_added list_id=%s project_id=%s", list_id, project_id)
        return item

    def remove_project_from_list(self, list_id: int, project_id: int, caller_id: Optional[int]) -> None:
        self._owned_list(list_id, caller_id, "remove projects")
        self.project_lists.remove_project(list_id, project_id)

    def is_project_in_list(self, list_id: int, project_id: int, caller_id: Optional[int]) -> bool:
        project_list = self.project_lists.get(list_id)
        if not project_list.can_be_accessed_by(caller_id):
            raise UnauthorizedError("this project list is private")
        return self.project_lists.is_project_in_list(list_id, project_id)
