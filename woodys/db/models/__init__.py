"""
Domain-split SQLAlchemy models.

Each entity carries its own ``validate()`` rules and the pure authorization
predicates (``can_be_edited_by`` and friends) consulted by the services.
"""

from .base import Base, now_utc  # re-export

from .users import User
from .projects import Project
from .comments import Comment, CommentStatus, DELETED_COMMENT_CONTENT
from .ratings import Rating
from .project_lists import ProjectList, ProjectListItem

__all__ = [
    "Base",
    "now_utc",
    "User",
    "Project",
    "Comment",
    "CommentStatus",
    "DELETED_COMMENT_CONTENT",
    "Rating",
    "ProjectList",
    "ProjectListItem",
]
