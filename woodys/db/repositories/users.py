"""
User repository.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from sqlalchemy import func

from woodys.db import models
from woodys.errors import NotFoundError
from .base import SqlAlchemyRepository, paginate


class UserRepository(ABC):
    @abstractmethod
    def create(self, user: models.User) -> models.User: ...

    @abstractmethod
    def get(self, user_id: int) -> models.User: ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[models.User]: ...

    @abstractmethod
    def find_by_firebase_uid(self, firebase_uid: str) -> Optional[models.User]: ...

    @abstractmethod
    def get_by_firebase_uid(self, firebase_uid: str) -> models.User: ...

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[models.User]: ...

    @abstractmethod
    def update(self, user: models.User) -> models.User: ...

    @abstractmethod
    def delete(self, user_id: int) -> None: ...

    @abstractmethod
    def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.User]: ...

    @abstractmethod
    def count_owned_rows(self, user_id: int) -> Dict[str, int]: ...


class SqlAlchemyUserRepository(SqlAlchemyRepository, UserRepository):
    model = models.User
    entity_name = "user"

    def create(self, user: models.User) -> models.User:
        return self._insert(user)

    def get(self, user_id: int) -> models.User:
        return self._get_or_raise(user_id)

    def find_by_email(self, email: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.email == email).first()

    def find_by_firebase_uid(self, firebase_uid: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.firebase_uid == firebase_uid).first()

    def get_by_firebase_uid(self, firebase_uid: str) -> models.User:
        user = self.find_by_firebase_uid(firebase_uid)
        if user is None:
            raise NotFoundError(f"user with firebase_uid {firebase_uid} not found")
        return user

    def find_by_username(self, username: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.username == username).first()

    def update(self, user: models.User) -> models.User:
        return self._save(user)

    def delete(self, user_id: int) -> None:
        self._delete_by_id(user_id)

    def list(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.User]:
        q = self.db.query(models.User).order_by(models.User.created_at.desc(), models.User.id.desc())
        return paginate(q, limit, offset)

    def count_owned_rows(self, user_id: int) -> Dict[str, int]:
        """Number of rows in each table that still reference the user."""
        owned = {
            "projects": (models.Project, models.Project.owner_id),
            "comments": (models.Comment, models.Comment.user_id),
            "ratings": (models.Rating, models.Rating.user_id),
            "project_lists": (models.ProjectList, models.ProjectList.user_id),
        }
        counts = {}
        for label, (model, column) in owned.items():
            counts[label] = self.db.query(func.count(model.id)).filter(column == user_id).scalar() or 0
        return counts
