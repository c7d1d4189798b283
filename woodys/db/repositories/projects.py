"""
Project repository.

Besides CRUD this owns the set-membership search and the single-statement
rating aggregate refresh.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from sqlalchemy import func, select, type_coerce, update
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError

from woodys.db import models, schemas
from woodys.errors import NotFoundError
from .base import SqlAlchemyRepository, paginate, translate_store_error

_RANKING = (
    models.Project.average_rating.desc(),
    models.Project.created_at.desc(),
    models.Project.id.desc(),
)
_NEWEST_FIRST = (models.Project.created_at.desc(), models.Project.id.desc())


class ProjectRepository(ABC):
    @abstractmethod
    def create(self, project: models.Project) -> models.Project: ...

    @abstractmethod
    def get(self, project_id: int) -> models.Project: ...

    @abstractmethod
    def update(self, project: models.Project) -> models.Project: ...

    @abstractmethod
    def delete(self, project_id: int) -> None: ...

    @abstractmethod
    def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]: ...

    @abstractmethod
    def list_by_owner(self, owner_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]: ...

    @abstractmethod
    def search(self, filters: schemas.ProjectSearchFilters) -> List[models.Project]: ...

    @abstractmethod
    def search_by_title(self, query: str, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]: ...

    @abstractmethod
    def list_popular(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]: ...

    @abstractmethod
    def list_recent(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]: ...

    @abstractmethod
    def list_top_rated(self, min_ratings: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]: ...

    @abstractmethod
    def refresh_rating_aggregate(self, project_id: int) -> Tuple[float, int]: ...

    @abstractmethod
    def owner_rating_summary(self, owner_id: int) -> Tuple[float, int]: ...


class SqlAlchemyProjectRepository(SqlAlchemyRepository, ProjectRepository):
    model = models.Project
    entity_name = "project"

    def create(self, project: models.Project) -> models.Project:
        return self._insert(project)

    def get(self, project_id: int) -> models.Project:
        return self._get_or_raise(project_id)

    def update(self, project: models.Project) -> models.Project:
        return self._save(project)

    def delete(self, project_id: int) -> None:
        """Delete the project with its list memberships, ratings and comments atomically."""
        project = self.get(project_id)
        try:
            self.db.query(models.ProjectListItem).filter(
                models.ProjectListItem.project_id == project_id
            ).delete(synchronize_session=False)
            self.db.query(models.Rating).filter(
                models.Rating.project_id == project_id
            ).delete(synchronize_session=False)
            self.db.query(models.Comment).filter(
                models.Comment.project_id == project_id
            ).delete(synchronize_session=False)
            self.db.delete(project)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_store_error(exc, self.entity_name) from exc

    def list(self, limit=None, offset=None) -> List[models.Project]:
        q = self.db.query(models.Project).order_by(*_NEWEST_FIRST)
        return paginate(q, limit, offset)

    def list_by_owner(self, owner_id: int, limit=None, offset=None) -> List[models.Project]:
        q = (
            self.db.query(models.Project)
            .filter(models.Project.owner_id == owner_id)
            .order_by(*_NEWEST_FIRST)
        )
        return paginate(q, limit, offset)

    def _contains(self, column, value: str):
        """Predicate: the JSON string-set ``column`` contains ``value``."""
        if self.db.get_bind().dialect.name == "postgresql":
            return type_coerce(column, JSONB).contains([value])
        elements = func.json_each(column).table_valued("value")
        return (
            select(elements.c.value)
            .where(elements.c.value == value)
            .correlate(models.Project)
            .exists()
        )

    def search(self, filters: schemas.ProjectSearchFilters) -> List[models.Project]:
        q = self.db.query(models.Project)
        if filters.q and filters.q.strip():
            q = q.filter(models.Project.title.icontains(filters.q.strip(), autoescape=True))
        for column, values in (
            (models.Project.style, filters.style),
            (models.Project.environment, filters.environment),
            (models.Project.materials, filters.materials),
            (models.Project.tools, filters.tools),
        ):
            for value in values or []:
                value = value.strip()
                if value:
                    q = q.filter(self._contains(column, value))
        if filters.max_time_to_build is not None and filters.max_time_to_build > 0:
            q = q.filter(models.Project.time_to_build <= filters.max_time_to_build)
        if filters.min_rating is not None and filters.min_rating > 0:
            q = q.filter(models.Project.average_rating >= filters.min_rating)
        q = q.order_by(*_RANKING)
        return paginate(q, filters.limit, filters.offset)

    def search_by_title(self, query: str, limit=None, offset=None) -> List[models.Project]:
        q = (
            self.db.query(models.Project)
            .filter(models.Project.title.icontains(query, autoescape=True))
            .order_by(*_RANKING)
        )
        return paginate(q, limit, offset)

    def list_popular(self, limit=None, offset=None) -> List[models.Project]:
        q = (
            self.db.query(models.Project)
            .filter(models.Project.rating_count > 0)
            .order_by(
                models.Project.average_rating.desc(),
                models.Project.rating_count.desc(),
                *_NEWEST_FIRST,
            )
        )
        return paginate(q, limit, offset)

    def list_recent(self, limit=None, offset=None) -> List[models.Project]:
        return self.list(limit, offset)

    def list_top_rated(self, min_ratings: int, limit=None, offset=None) -> List[models.Project]:
        q = (
            self.db.query(models.Project)
            .filter(models.Project.rating_count >= min_ratings)
            .order_by(models.Project.average_rating.desc(), models.Project.rating_count.desc(), models.Project.id.desc())
        )
        return paginate(q, limit, offset)

    def refresh_rating_aggregate(self, project_id: int) -> Tuple[float, int]:
        """Rewrite average_rating/rating_count from the ratings table in one UPDATE."""
        average = (
            select(func.coalesce(func.avg(models.Rating.value), 0.0))
            .where(models.Rating.project_id == project_id)
            .scalar_subquery()
        )
        count = (
            select(func.count(models.Rating.id))
            .where(models.Rating.project_id == project_id)
            .scalar_subquery()
        )
        stmt = (
            update(models.Project)
            .where(models.Project.id == project_id)
            .values(average_rating=average, rating_count=count)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                raise NotFoundError.for_entity(self.entity_name, project_id)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise translate_store_error(exc, self.entity_name) from exc
        row = (
            self.db.query(models.Project.average_rating, models.Project.rating_count)
            .filter(models.Project.id == project_id)
            .one()
        )
        return float(row[0] or 0.0), int(row[1] or 0)

    def owner_rating_summary(self, owner_id: int) -> Tuple[float, int]:
        """Sum of average ratings and number of rated projects owned by ``owner_id``."""
        total, rated = (
            self.db.query(func.coalesce(func.sum(models.Project.average_rating), 0.0), func.count(models.Project.id))
            .filter(models.Project.owner_id == owner_id, models.Project.rating_count > 0)
            .one()
        )
        return float(total or 0.0), int(rated or 0)
