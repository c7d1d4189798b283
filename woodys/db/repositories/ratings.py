"""
Rating repository.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from woodys.db import models
from woodys.errors import NotFoundError
from .base import SqlAlchemyRepository, paginate


class RatingRepository(ABC):
    @abstractmethod
    def create(self, rating: models.Rating) -> models.Rating: ...

    @abstractmethod
    def find_by_user_and_project(self, user_id: int, project_id: int) -> Optional[models.Rating]: ...

    @abstractmethod
    def get_by_user_and_project(self, user_id: int, project_id: int) -> models.Rating: ...

    @abstractmethod
    def update(self, rating: models.Rating) -> models.Rating: ...

    @abstractmethod
    def delete(self, rating_id: int) -> None: ...

    @abstractmethod
    def list_by_project(self, project_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Rating]: ...

    @abstractmethod
    def list_by_user(self, user_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Rating]: ...

    @abstractmethod
    def get_average(self, project_id: int) -> Tuple[float, int]: ...

    @abstractmethod
    def get_distribution(self, project_id: int) -> Dict[int, int]: ...

    @abstractmethod
    def get_trends(self, project_id: int, since: datetime) -> List[Tuple[str, float, int]]: ...


class SqlAlchemyRatingRepository(SqlAlchemyRepository, RatingRepository):
    model = models.Rating
    entity_name = "rating"

    def create(self, rating: models.Rating) -> models.Rating:
        return self._insert(rating)

    def find_by_user_and_project(self, user_id: int, project_id: int) -> Optional[models.Rating]:
        return (
            self.db.query(models.Rating)
            .filter(models.Rating.user_id == user_id, models.Rating.project_id == project_id)
            .first()
        )

    def get_by_user_and_project(self, user_id: int, project_id: int) -> models.Rating:
        rating = self.find_by_user_and_project(user_id, project_id)
        if rating is None:
            raise NotFoundError(f"rating by user {user_id} for project {project_id} not found")
        return rating

    def update(self, rating: models.Rating) -> models.Rating:
        return self._save(rating)

    def delete(self, rating_id: int) -> None:
        self._delete_by_id(rating_id)

    def list_by_project(self, project_id: int, limit=None, offset=None) -> List[models.Rating]:
        q = (
            self.db.query(models.Rating)
            .options(joinedload(models.Rating.user))
            .filter(models.Rating.project_id == project_id)
            .order_by(models.Rating.created_at.desc(), models.Rating.id.desc())
        )
        return paginate(q, limit, offset)

    def list_by_user(self, user_id: int, limit=None, offset=None) -> List[models.Rating]:
        q = (
            self.db.query(models.Rating)
            .filter(models.Rating.user_id == user_id)
            .order_by(models.Rating.created_at.desc(), models.Rating.id.desc())
        )
        return paginate(q, limit, offset)

    def get_average(self, project_id: int) -> Tuple[float, int]:
        avg, count = (
            self.db.query(func.coalesce(func.avg(models.Rating.value), 0.0), func.count(models.Rating.id))
            .filter(models.Rating.project_id == project_id)
            .one()
        )
        return float(avg or 0.0), int(count or 0)

    def get_distribution(self, project_id: int) -> Dict[int, int]:
        rows = (
            self.db.query(models.Rating.value, func.count(models.Rating.id))
            .filter(models.Rating.project_id == project_id)
            .group_by(models.Rating.value)
            .all()
        )
        return {int(value): int(count) for value, count in rows}

    def get_trends(self, project_id: int, since: datetime) -> List[Tuple[str, float, int]]:
        day = func.date(models.Rating.created_at)
        rows = (
            self.db.query(day, func.avg(models.Rating.value), func.count(models.Rating.id))
            .filter(models.Rating.project_id == project_id, models.Rating.created_at >= since)
            .group_by(day)
            .order_by(day.desc())
            .all()
        )
        return [(str(d), float(avg or 0.0), int(count)) for d, avg, count in rows]
