from sqlalchemy import Column, Integer, String, Float, DateTime, CheckConstraint, Index
from sqlalchemy.orm import relationship

from woodys.errors import ValidationError
from woodys.utils.validation import USERNAME_MAX_LENGTH, USERNAME_MIN_LENGTH
from .base import Base, now_utc


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(USERNAME_MAX_LENGTH), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    # External identity token issued by the authentication provider
    firebase_uid = Column(String(128), nullable=False, unique=True)
    reputation = Column(Float, nullable=False, default=0.0)
    profile_picture = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    projects = relationship("Project", back_populates="owner")

    __table_args__ = (
        Index('idx_users_created_at', 'created_at'),
        CheckConstraint('reputation >= 0', name='ck_users_reputation_non_negative'),
        CheckConstraint('profile_picture >= 0', name='ck_users_profile_picture_non_negative'),
    )

    def validate(self) -> None:
        username = (self.username or "").strip()
        if not username:
            raise ValidationError("username", "username is required")
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise ValidationError(
                "username",
                f"username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters",
            )
        if not (self.email or "").strip():
            raise ValidationError("email", "email is required")
        if not (self.firebase_uid or "").strip():
            raise ValidationError("firebase_uid", "firebase_uid is required")
        if (self.reputation or 0) < 0:
            raise ValidationError("reputation", "reputation cannot be negative")
        if (self.profile_picture or 0) < 0:
            raise ValidationError("profile_picture", "profile_picture cannot be negative")

    def can_be_edited_by(self, user_id) -> bool:
        return user_id is not None and self.id == user_id

    def can_be_deleted_by(self, user_id) -> bool:
        return self.can_be_edited_by(user_id)
