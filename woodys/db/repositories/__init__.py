"""
Per-domain repositories.

Each module defines an abstract interface and its SQLAlchemy adapter. The
adapters receive the session explicitly; ``build_repositories`` wires one set
for a request-scoped session.
"""
from dataclasses import dataclass

from sqlalchemy.orm import Session

from .comments import CommentRepository, SqlAlchemyCommentRepository
from .project_lists import ProjectListRepository, SqlAlchemyProjectListRepository
from .projects import ProjectRepository, SqlAlchemyProjectRepository
from .ratings import RatingRepository, SqlAlchemyRatingRepository
from .users import SqlAlchemyUserRepository, UserRepository


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    projects: ProjectRepository
    comments: CommentRepository
    ratings: RatingRepository
    project_lists: ProjectListRepository


def build_repositories(db: Session) -> Repositories:
    return Repositories(
        users=SqlAlchemyUserRepository(db),
        projects=SqlAlchemyProjectRepository(db),
        comments=SqlAlchemyCommentRepository(db),
        ratings=SqlAlchemyRatingRepository(db),
        project_lists=SqlAlchemyProjectListRepository(db),
    )


__all__ = [
    "Repositories",
    "build_repositories",
    "UserRepository",
    "ProjectRepository",
    "CommentRepository",
    "RatingRepository",
    "ProjectListRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyCommentRepository",
    "SqlAlchemyRatingRepository",
    "SqlAlchemyProjectListRepository",
]
