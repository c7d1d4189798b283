"""
Service layer: business rules on top of the repository interfaces.
"""
from dataclasses import dataclass

from sqlalchemy.orm import Session

from woodys.db.repositories import Repositories, build_repositories
from .comment_service import CommentService
from .project_list_service import ProjectListService
from .project_service import ProjectService
from .rating_aggregator import RatingAggregator
from .rating_service import RatingService
from .user_service import UserService


@dataclass(frozen=True)
class Services:
    users: UserService
    projects: ProjectService
    comments: CommentService
    ratings: RatingService
    project_lists: ProjectListService


def build_services_from(repos: Repositories) -> Services:
    aggregator = RatingAggregator(repos.projects, repos.ratings)
    return Services(
        users=UserService(repos.users, repos.projects, repos.ratings),
        projects=ProjectService(repos.projects, repos.users),
        comments=CommentService(repos.comments, repos.projects, repos.users),
        ratings=RatingService(repos.ratings, repos.projects, repos.users, aggregator),
        project_lists=ProjectListService(repos.project_lists, repos.projects, repos.users),
    )


def build_services(db: Session) -> Services:
    return build_services_from(build_repositories(db))


__all__ = [
    "Services",
    "build_services",
    "build_services_from",
    "UserService",
    "ProjectService",
    "CommentService",
    "RatingService",
    "RatingAggregator",
    "ProjectListService",
]
