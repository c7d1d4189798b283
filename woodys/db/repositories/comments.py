"""
Comment repository.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import joinedload

from woodys.db import models
from .base import SqlAlchemyRepository, paginate

_ACTIVE = models.CommentStatus.ACTIVE.value


class CommentRepository(ABC):
    @abstractmethod
    def create(self, comment: models.Comment) -> models.Comment: ...

    @abstractmethod
    def get(self, comment_id: int) -> models.Comment: ...

    @abstractmethod
    def update(self, comment: models.Comment) -> models.Comment: ...

    @abstractmethod
    def soft_delete(self, comment_id: int) -> models.Comment: ...

    @abstractmethod
    def list_top_level(self, project_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Comment]: ...

    @abstractmethod
    def list_replies(self, parent_comment_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Comment]: ...

    @abstractmethod
    def replies_for(self, parent_comment_ids: Iterable[int]) -> Dict[int, List[models.Comment]]: ...

    @abstractmethod
    def list_by_user(self, user_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Comment]: ...

    @abstractmethod
    def count_for_project(self, project_id: int) -> int: ...


class SqlAlchemyCommentRepository(SqlAlchemyRepository, CommentRepository):
    model = models.Comment
    entity_name = "comment"

    def create(self, comment: models.Comment) -> models.Comment:
        return self._insert(comment)

    def get(self, comment_id: int) -> models.Comment:
        return self._get_or_raise(comment_id)

    def update(self, comment: models.Comment) -> models.Comment:
        return self._save(comment)

    def soft_delete(self, comment_id: int) -> models.Comment:
        comment = self.get(comment_id)
        if comment.soft_delete():
            self._commit(refresh=comment)
        return comment

    def _active_with_author(self):
        return (
            self.db.query(models.Comment)
            .options(joinedload(models.Comment.author))
            .filter(models.Comment.status == _ACTIVE)
        )

    def list_top_level(self, project_id: int, limit=None, offset=None) -> List[models.Comment]:
        q = (
            self._active_with_author()
            .filter(
                models.Comment.project_id == project_id,
                models.Comment.parent_comment_id.is_(None),
            )
            .order_by(models.Comment.created_at.desc(), models.Comment.id.desc())
        )
        return paginate(q, limit, offset)

    def list_replies(self, parent_comment_id: int, limit=None, offset=None) -> List[models.Comment]:
        q = (
            self._active_with_author()
            .filter(models.Comment.parent_comment_id == parent_comment_id)
            .order_by(models.Comment.created_at.asc(), models.Comment.id.asc())
        )
        return paginate(q, limit, offset)

    def replies_for(self, parent_comment_ids: Iterable[int]) -> Dict[int, List[models.Comment]]:
        """Every active reply to each of the given comments, oldest first, in one query."""
        ids = list(parent_comment_ids)
        if not ids:
            return {}
        rows = (
            self._active_with_author()
            .filter(models.Comment.parent_comment_id.in_(ids))
            .order_by(models.Comment.created_at.asc(), models.Comment.id.asc())
            .all()
        )
        grouped: Dict[int, List[models.Comment]] = {parent_id: [] for parent_id in ids}
        for reply in rows:
            grouped[reply.parent_comment_id].append(reply)
        return grouped

    def list_by_user(self, user_id: int, limit=None, offset=None) -> List[models.Comment]:
        q = (
            self._active_with_author()
            .filter(models.Comment.user_id == user_id)
            .order_by(models.Comment.created_at.desc(), models.Comment.id.desc())
        )
        return paginate(q, limit, offset)

    def count_for_project(self, project_id: int) -> int:
        return (
            self.db.query(func.count(models.Comment.id))
            .filter(models.Comment.project_id == project_id, models.Comment.status == _ACTIVE)
            .scalar()
            or 0
        )
