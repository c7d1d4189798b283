"""
Domain-split Pydantic schemas with a compatibility aggregator.
"""

from .users import UserBase, UserCreate, UserUpdate, User, UserReputation
from .projects import ProjectBase, ProjectCreate, ProjectUpdate, Project, ProjectSearchFilters
from .comments import CommentCreate, CommentUpdate, Comment, CommentWithAuthor
from .ratings import RatingCreate, RatingUpdate, Rating, RatingWithAuthor, RatingStats, RatingTrendPoint
from .project_lists import (
    ProjectListCreate,
    ProjectListUpdate,
    ProjectList,
    ProjectListProject,
    ProjectListDetail,
    ProjectListItemCreate,
    ProjectListMembership,
)

__all__ = [
    # users
    "UserBase",
    "UserCreate",
    "UserUpdate",
    "User",
    "UserReputation",
    # projects
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "Project",
    "ProjectSearchFilters",
    # comments
    "CommentCreate",
    "CommentUpdate",
    "Comment",
    "CommentWithAuthor",
    # ratings
    "RatingCreate",
    "RatingUpdate",
    "Rating",
    "RatingWithAuthor",
    "RatingStats",
    "RatingTrendPoint",
    # project lists
    "ProjectListCreate",
    "ProjectListUpdate",
    "ProjectList",
    "ProjectListProject",
    "ProjectListDetail",
    "ProjectListItemCreate",
    "ProjectListMembership",
]
