from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship

from woodys.errors import ValidationError
from .base import Base, now_utc, require_positive_id

MIN_RATING = 1
MAX_RATING = 5


class Rating(Base):
    __tablename__ = 'ratings'
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    value = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    user = relationship("User")

    __table_args__ = (
        UniqueConstraint('user_id', 'project_id', name='uq_ratings_user_project'),
        Index('idx_ratings_project_id', 'project_id'),
        CheckConstraint('value >= 1 AND value <= 5', name='ck_ratings_value_range'),
    )

    def validate(self) -> None:
        require_positive_id(self.project_id, "project_id")
        require_positive_id(self.user_id, "user_id")
        if self.value is None or not MIN_RATING <= self.value <= MAX_RATING:
            raise ValidationError("value", f"value must be between {MIN_RATING} and {MAX_RATING}")

    def can_be_edited_by(self, user_id) -> bool:
        return user_id is not None and self.user_id == user_id

    def can_be_deleted_by(self, user_id) -> bool:
        return self.can_be_edited_by(user_id)
