"""
Rating service: one rating per user and project, with aggregate upkeep.
"""
import logging
from datetime import timedelta
from typing import List, Optional

from woodys.db import models, schemas
from woodys.db.models.base import now_utc
from woodys.db.repositories import ProjectRepository, RatingRepository, UserRepository
from woodys.errors import ConflictError, UnauthorizedError, ValidationError
from woodys.services.rating_aggregator import RatingAggregator
from woodys.utils.validation import normalize_pagination

logger = logging.getLogger(__name__)

MAX_TREND_DAYS = 365


class RatingService:
    def __init__(
        self,
        ratings: RatingRepository,
        projects: ProjectRepository,
        users: UserRepository,
        aggregator: Optional[RatingAggregator] = None,
    ):
        self.ratings = ratings
        self.projects = projects
        self.users = users
        self.aggregator = aggregator or RatingAggregator(projects, ratings)

    def create_rating(self, project_id: int, payload: schemas.RatingCreate, caller_id: Optional[int]) -> models.Rating:
        if caller_id is None:
            raise UnauthorizedError("an authenticated user is required to rate a project")
        self.users.get(caller_id)
        self.projects.get(project_id)
        if self.ratings.find_by_user_and_project(caller_id, project_id) is not None:
            raise ConflictError("user has already rated this project")

        rating = models.Rating(project_id=project_id, user_id=caller_id, value=payload.value)
        try:
            created = self.ratings.create(rating)
        except ConflictError as exc:
            raise exc.with_context("user has already rated this project")
        logger.info("rating_created project_id=%s user_id=%s value=%s", project_id, caller_id, payload.value)
        self.aggregator.recompute(project_id)
        return created

    def update_rating(
        self,
        project_id: int,
        payload: schemas.RatingUpdate,
        caller_id: Optional[int],
        user_id: Optional[int] = None,
    ) -> models.Rating:
        """Change the rating left by ``user_id`` (the caller by default)."""
        rating = self.ratings.get_by_user_and_project(caller_id if user_id is None else user_id, project_id)
        if not rating.can_be_edited_by(caller_id):
            raise UnauthorizedError("only the author can update this rating")
        rating.value = payload.value
        updated = self.ratings.update(rating)
        self.aggregator.recompute(project_id)
        return updated

    def delete_rating(self, project_id: int, caller_id: Optional[int], user_id: Optional[int] = None) -> None:
        rating = self.ratings.get_by_user_and_project(caller_id if user_id is None else user_id, project_id)
        if not rating.can_be_deleted_by(caller_id):
            raise UnauthorizedError("only the author can delete this rating")
        self.ratings.delete(rating.id)
        logger.info("rating_deleted project_id=%s user_id=%s", project_id, caller_id)
        self.aggregator.recompute(project_id)

    def get_project_ratings(
        self, project_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[schemas.RatingWithAuthor]:
        limit, offset = normalize_pagination(limit, offset)
        self.projects.get(project_id)
        return [
            schemas.RatingWithAuthor(
                **schemas.Rating.model_validate(rating, from_attributes=True).model_dump(),
                username=rating.user.username if rating.user is not None else None,
            )
            for rating in self.ratings.list_by_project(project_id, limit, offset)
        ]

    def get_user_rating(self, project_id: int, user_id: int) -> models.Rating:
        return self.ratings.get_by_user_and_project(user_id, project_id)

    def has_user_rated(self, project_id: int, user_id: int) -> bool:
        return self.ratings.find_by_user_and_project(user_id, project_id) is not None

    def get_project_rating_stats(self, project_id: int) -> schemas.RatingStats:
        self.projects.get(project_id)
        return self.aggregator.stats(project_id)

    def get_rating_trends(self, project_id: int, days: int = 30) -> List[schemas.RatingTrendPoint]:
        """Per-day average and count over the last ``days`` days, newest day first."""
        if days <= 0 or days > MAX_TREND_DAYS:
            raise ValidationError("days", f"days must be between 1 and {MAX_TREND_DAYS}")
        self.projects.get(project_id)
        since = now_utc() - timedelta(days=days)
        return [
            schemas.RatingTrendPoint(day=day, average_rating=average, count=count)
            for day, average, count in self.ratings.get_trends(project_id, since)
        ]
