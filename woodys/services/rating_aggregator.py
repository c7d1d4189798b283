"""
Rating aggregation engine.

Keeps ``Project.average_rating``/``Project.rating_count`` in line with the
ratings table and computes per-project rating statistics.
"""
import logging
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from woodys.db import schemas
from woodys.db.models.ratings import MAX_RATING, MIN_RATING
from woodys.db.repositories import ProjectRepository, RatingRepository
from woodys.errors import WoodysError

logger = logging.getLogger(__name__)


class RatingAggregator:
    """Recomputes project rating aggregates after rating writes."""

    def __init__(self, projects: ProjectRepository, ratings: RatingRepository):
        self.projects = projects
        self.ratings = ratings

    def recompute(self, project_id: int) -> Optional[Tuple[float, int]]:
        """Refresh the stored aggregate; failures are logged and swallowed.

        The rating write that triggered the refresh has already been
        committed, so a failure here must not turn it into an error.
        """
        try:
            average, count = self.projects.refresh_rating_aggregate(project_id)
        except (WoodysError, SQLAlchemyError) as exc:
            logger.warning("rating_aggregate_refresh_failed project_id=%s error=%s", project_id, exc)
            return None
        logger.debug("rating_aggregate_refreshed project_id=%s average=%.3f count=%d", project_id, average, count)
        return average, count

    def stats(self, project_id: int) -> schemas.RatingStats:
        average, total = self.ratings.get_average(project_id)
        counts = self.ratings.get_distribution(project_id)
        distribution = {value: counts.get(value, 0) for value in range(MIN_RATING, MAX_RATING + 1)}
        return schemas.RatingStats(
            project_id=project_id,
            average_rating=average,
            total_ratings=total,
            distribution=distribution,
        )
