"""
Project list repository.

List deletion removes the list's items and the list itself in a single
transaction; membership writes go through ``add_project``/``remove_project``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError

from woodys.db import models
from woodys.errors import NotFoundError
from .base import SqlAlchemyRepository, paginate, translate_store_error

_NEWEST_FIRST = (models.ProjectList.created_at.desc(), models.ProjectList.id.desc())


class ProjectListRepository(ABC):
    @abstractmethod
    def create(self, project_list: models.ProjectList) -> models.ProjectList: ...

    @abstractmethod
    def get(self, list_id: int) -> models.ProjectList: ...

    @abstractmethod
    def update(self, project_list: models.ProjectList) -> models.ProjectList: ...

    @abstractmethod
    def delete(self, list_id: int) -> None: ...

    @abstractmethod
    def list_by_user(self, user_id: int, public_only: bool = False, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.ProjectList]: ...

    @abstractmethod
    def list_public(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.ProjectList]: ...

    @abstractmethod
    def item_counts(self, list_ids: Iterable[int]) -> Dict[int, int]: ...

    @abstractmethod
    def list_projects(self, list_id: int) -> List[Tuple[models.Project, datetime]]: ...

    @abstractmethod
    def add_project(self, list_id: int, project_id: int) -> models.ProjectListItem: ...

    @abstractmethod
    def remove_project(self, list_id: int, project_id: int) -> None: ...

    @abstractmethod
    def is_project_in_list(self, list_id: int, project_id: int) -> bool: ...


class SqlAlchemyProjectListRepository(SqlAlchemyRepository, ProjectListRepository):
    model = models.ProjectList
    entity_name = "project list"

    def create(self, project_list: models.ProjectList) -> models.ProjectList:
        return self._insert(project_list)

    def get(self, list_id: int) -> models.ProjectList:
        return self._get_or_raise(list_id)

    def update(self, project_list: models.ProjectList) -> models.ProjectList:
        return self._save(project_list)

    def delete(self, list_id: int) -> None:
        try:
            self.db.execute(
                delete(models.ProjectListItem).where(models.ProjectListItem.project_list_id == list_id)
            )
            deleted = self._delete_list_row(list_id)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_store_error(exc, self.entity_name) from exc
        if deleted == 0:
            self.db.rollback()
            raise NotFoundError.for_entity(self.entity_name, list_id)
        self._commit()

    def _delete_list_row(self, list_id: int) -> int:
        result = self.db.execute(delete(models.ProjectList).where(models.ProjectList.id == list_id))
        return result.rowcount

    def list_by_user(self, user_id: int, public_only: bool = False, limit=None, offset=None) -> List[models.ProjectList]:
        q = self.db.query(models.ProjectList).filter(models.ProjectList.user_id == user_id)
        if public_only:
            q = q.filter(models.ProjectList.is_public.is_(True))
        return paginate(q.order_by(*_NEWEST_FIRST), limit, offset)

    def list_public(self, limit=None, offset=None) -> List[models.ProjectList]:
        q = (
            self.db.query(models.ProjectList)
            .filter(models.ProjectList.is_public.is_(True))
            .order_by(*_NEWEST_FIRST)
        )
        return paginate(q, limit, offset)

    def item_counts(self, list_ids: Iterable[int]) -> Dict[int, int]:
        ids = list(list_ids)
        if not ids:
            return {}
        rows = (
            self.db.query(models.ProjectListItem.project_list_id, func.count(models.ProjectListItem.id))
            .filter(models.ProjectListItem.project_list_id.in_(ids))
            .group_by(models.ProjectListItem.project_list_id)
            .all()
        )
        return {list_id: count for list_id, count in rows}

    def list_projects(self, list_id: int) -> List[Tuple[models.Project, datetime]]:
        rows = (
            self.db.query(models.Project, models.ProjectListItem.created_at)
            .join(models.ProjectListItem, models.ProjectListItem.project_id == models.Project.id)
            .filter(models.ProjectListItem.project_list_id == list_id)
            .order_by(models.ProjectListItem.created_at.desc(), models.ProjectListItem.id.desc())
            .all()
        )
        return [(project, added_at) for project, added_at in rows]

    def add_project(self, list_id: int, project_id: int) -> models.ProjectListItem:
        item = models.ProjectListItem(project_list_id=list_id, project_id=project_id)
        return self._insert(item)

    def remove_project(self, list_id: int, project_id: int) -> None:
        try:
            result = self.db.execute(
                delete(models.ProjectListItem).where(
                    models.ProjectListItem.project_list_id == list_id,
                    models.ProjectListItem.project_id == project_id,
                )
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_store_error(exc, self.entity_name) from exc
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundError(f"project {project_id} is not in project list {list_id}")
        self._commit()

    def is_project_in_list(self, list_id: int, project_id: int) -> bool:
        return (
            self.db.query(models.ProjectListItem.id)
            .filter(
                models.ProjectListItem.project_list_id == list_id,
                models.ProjectListItem.project_id == project_id,
            )
            .first()
            is not None
        )
