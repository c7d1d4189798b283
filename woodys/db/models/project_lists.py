from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from woodys.errors import ValidationError
from .base import Base, now_utc, require_positive_id

NAME_MAX_LENGTH = 100


class ProjectList(Base):
    __tablename__ = 'project_lists'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    is_public = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    items = relationship("ProjectListItem", back_populates="project_list")

    __table_args__ = (
        Index('idx_project_lists_user_id', 'user_id'),
        Index('idx_project_lists_is_public', 'is_public'),
    )

    def validate(self) -> None:
        name = (self.name or "").strip()
        if not name:
            raise ValidationError("name", "name is required")
        if len(self.name) > NAME_MAX_LENGTH:
            raise ValidationError("name", f"name must be at most {NAME_MAX_LENGTH} characters")
        require_positive_id(self.user_id, "user_id")

    def can_be_accessed_by(self, user_id) -> bool:
        return bool(self.is_public) or (user_id is not None and self.user_id == user_id)

    def can_be_edited_by(self, user_id) -> bool:
        return user_id is not None and self.user_id == user_id

    def can_be_deleted_by(self, user_id) -> bool:
        return self.can_be_edited_by(user_id)


class ProjectListItem(Base):
    __tablename__ = 'project_list_items'
    id = Column(Integer, primary_key=True, autoincrement=True)
    project_list_id = Column(Integer, ForeignKey('project_lists.id'), nullable=False)
    project_id = Column(Integer, ForeignKey('projects.id'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    project_list = relationship("ProjectList", back_populates="items")
    project = relationship("Project")

    __table_args__ = (
        UniqueConstraint('project_list_id', 'project_id', name='uq_project_list_items_list_project'),
        Index('idx_project_list_items_project_id', 'project_id'),
    )

    def validate(self) -> None:
        require_positive_id(self.project_list_id, "project_list_id")
        require_positive_id(self.project_id, "project_id")
