"""
User service: registration, profile updates and reputation.
"""
import logging
from typing import List, Optional

from woodys.db import models, schemas
from woodys.db.repositories import ProjectRepository, RatingRepository, UserRepository
from woodys.errors import ConflictError, UnauthorizedError, ValidationError
from woodys.utils.validation import normalize_pagination, validate_email, validate_username

logger = logging.getLogger(__name__)

REPUTATION_WEIGHT = 0.1


class UserService:
    """Service class for user accounts."""

    def __init__(self, users: UserRepository, projects: ProjectRepository, ratings: RatingRepository):
        self.users = users
        self.projects = projects
        self.ratings = ratings

    def create_user(self, payload: schemas.UserCreate) -> models.User:
        username = validate_username(payload.username)
        email = validate_email(payload.email)
        firebase_uid = (payload.firebase_uid or "").strip()
        if not firebase_uid:
            raise ValidationError("firebase_uid", "firebase_uid is required")
        if payload.profile_picture < 0:
            raise ValidationError("profile_picture", "profile_picture cannot be negative")

        if self.users.find_by_email(email) is not None:
            raise ConflictError(f"user with email {email} already exists")
        if self.users.find_by_firebase_uid(firebase_uid) is not None:
            raise ConflictError(f"user with firebase_uid {firebase_uid} already exists")
        if self.users.find_by_username(username) is not None:
            raise ConflictError(f"user with username {username} already exists")

        user = models.User(
            username=username,
            email=email,
            firebase_uid=firebase_uid,
            reputation=0.0,
            profile_picture=payload.profile_picture,
        )
        try:
            created = self.users.create(user)
        except ConflictError as exc:
            raise exc.with_context("failed to create user")
        logger.info("user_created id=%s username=%s", created.id, created.username)
        return created

    def get_user(self, user_id: int) -> models.User:
        return self.users.get(user_id)

    def get_user_by_firebase_uid(self, firebase_uid: str) -> models.User:
        if not (firebase_uid or "").strip():
            raise ValidationError("firebase_uid", "firebase_uid is required")
        return self.users.get_by_firebase_uid(firebase_uid.strip())

    def update_user(self, user_id: int, payload: schemas.UserUpdate, caller_id: Optional[int]) -> models.User:
        user = self.users.get(user_id)
        if not user.can_be_edited_by(caller_id):
            raise UnauthorizedError("only the account owner can update this user")

        data = payload.model_dump(exclude_unset=True)
        changes = {}
        if data.get("username") is not None:
            changes["username"] = validate_username(data["username"])
        if data.get("reputation") is not None:
            if data["reputation"] < 0:
                raise ValidationError("reputation", "reputation cannot be negative")
            changes["reputation"] = data["reputation"]
        if data.get("profile_picture") is not None:
            if data["profile_picture"] < 0:
                raise ValidationError("profile_picture", "profile_picture cannot be negative")
            changes["profile_picture"] = data["profile_picture"]

        for key, value in changes.items():
            setattr(user, key, value)
        try:
            return self.users.update(user)
        except ConflictError as exc:
            raise exc.with_context("failed to update user")

    def delete_user(self, user_id: int, caller_id: Optional[int]) -> None:
        """Delete an account that no longer owns any content."""
        user = self.users.get(user_id)
        if not user.can_be_deleted_by(caller_id):
            raise UnauthorizedError("only the account owner can delete this user")
        owned = {label: count for label, count in self.users.count_owned_rows(user_id).items() if count}
        if owned:
            summary = ", ".join(f"{count} {label}" for label, count in sorted(owned.items()))
            raise ConflictError(f"user {user_id} still owns {summary}")
        self.users.delete(user_id)
        logger.info("user_deleted id=%s", user_id)

    def list_users(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.User]:
        limit, offset = normalize_pagination(limit, offset)
        return self.users.list(limit, offset)

    def get_user_projects(self, user_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Project]:
        limit, offset = normalize_pagination(limit, offset)
        self.users.get(user_id)
        return self.projects.list_by_owner(user_id, limit, offset)

    def get_user_ratings(self, user_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Rating]:
        limit, offset = normalize_pagination(limit, offset)
        self.users.get(user_id)
        return self.ratings.list_by_user(user_id, limit, offset)

    def calculate_reputation(self, user_id: int) -> float:
        """Reputation earned from the ratings on the user's projects.

        Each rated project contributes a tenth of its average rating. Users
        without rated projects keep their stored reputation.
        """
        user = self.users.get(user_id)
        total, rated = self.projects.owner_rating_summary(user_id)
        if rated == 0:
            return float(user.reputation or 0.0)
        return total * REPUTATION_WEIGHT
