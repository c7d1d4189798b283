from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from woodys.db.types import StringList, StringSet
from woodys.errors import ValidationError
from .base import Base, now_utc, require_positive_id

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000
TUTORIAL_MAX_LENGTH = 10000


class Project(Base):
    __tablename__ = 'projects'
    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=False, default="")
    tutorial = Column(Text, nullable=False, default="")
    materials = Column(StringSet(), nullable=False, default=list)
    tools = Column(StringSet(), nullable=False, default=list)
    style = Column(StringSet(), nullable=False, default=list)
    environment = Column(StringSet(), nullable=False, default=list)
    portrait = Column(String(2048), nullable=False, default="")
    images = Column(StringList(), nullable=False, default=list)
    # Minutes
    time_to_build = Column(Integer, nullable=False, default=0)
    # Derived from ratings; written only by the aggregate recompute
    average_rating = Column(Float, nullable=False, default=0.0)
    rating_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    owner = relationship("User", back_populates="projects")

    __table_args__ = (
        Index('idx_projects_owner_id', 'owner_id'),
        Index('idx_projects_created_at', 'created_at'),
        Index('idx_projects_average_rating', 'average_rating'),
        CheckConstraint('time_to_build >= 0', name='ck_projects_time_to_build_non_negative'),
        CheckConstraint('rating_count >= 0', name='ck_projects_rating_count_non_negative'),
    )

    def validate(self) -> None:
        title = (self.title or "").strip()
        if not title:
            raise ValidationError("title", "title is required")
        if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
            raise ValidationError(
                "title", f"title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters"
            )
        require_positive_id(self.owner_id, "owner_id")
        if len(self.description or "") > DESCRIPTION_MAX_LENGTH:
            raise ValidationError("description", f"description must be at most {DESCRIPTION_MAX_LENGTH} characters")
        if len(self.tutorial or "") > TUTORIAL_MAX_LENGTH:
            raise ValidationError("tutorial", f"tutorial must be at most {TUTORIAL_MAX_LENGTH} characters")
        if (self.time_to_build or 0) < 0:
            raise ValidationError("time_to_build", "time_to_build cannot be negative")

    def can_be_edited_by(self, user_id) -> bool:
        return user_id is not None and self.owner_id == user_id

    def can_be_deleted_by(self, user_id) -> bool:
        return self.can_be_edited_by(user_id)
