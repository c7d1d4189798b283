from enum import Enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from woodys.errors import ValidationError
from .base import Base, now_utc, require_positive_id

CONTENT_MAX_LENGTH = 1000
DELETED_COMMENT_CONTENT = "[This comment has been deleted]"


class CommentStatus(str, Enum):
    ACTIVE = 'active'
    DELETED = 'deleted'


class Comment(Base):
    __tablename__ = 'comments'
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    parent_comment_id = Column(Integer, ForeignKey('comments.id'), nullable=True)
    content = Column(Text, nullable=False)
    # 0 means the comment carries no rating
    rating = Column(Integer, nullable=False, default=0)
    status = Column(String(16), nullable=False, default=CommentStatus.ACTIVE.value)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    author = relationship("User")
    project = relationship("Project")

    __table_args__ = (
        Index('idx_comments_project_id', 'project_id'),
        Index('idx_comments_user_id', 'user_id'),
        Index('idx_comments_parent_comment_id', 'parent_comment_id'),
        CheckConstraint("status in ('active','deleted')", name='ck_comments_status'),
        CheckConstraint('rating >= 0 AND rating <= 5', name='ck_comments_rating_range'),
    )

    @property
    def is_deleted(self) -> bool:
        return self.status == CommentStatus.DELETED.value

    @property
    def is_reply(self) -> bool:
        return self.parent_comment_id is not None

    def validate(self) -> None:
        content = (self.content or "").strip()
        if not content:
            raise ValidationError("content", "content is required")
        if len(self.content) > CONTENT_MAX_LENGTH:
            raise ValidationError("content", f"content must be at most {CONTENT_MAX_LENGTH} characters")
        require_positive_id(self.project_id, "project_id")
        require_positive_id(self.user_id, "user_id")
        rating = self.rating or 0
        if rating < 0 or rating > 5:
            raise ValidationError("rating", "rating must be between 1 and 5, or 0 for no rating")

    def can_be_edited_by(self, user_id) -> bool:
        return user_id is not None and self.user_id == user_id and not self.is_deleted

    def can_be_deleted_by(self, user_id) -> bool:
        return user_id is not None and self.user_id == user_id

    def soft_delete(self) -> bool:
        """Move the comment to the deleted state; returns False when already deleted."""
        if self.is_deleted:
            return False
        self.status = CommentStatus.DELETED.value
        self.content = DELETED_COMMENT_CONTENT
        return True
