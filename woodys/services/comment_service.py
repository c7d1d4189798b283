"""
Comment service: threaded comments with soft deletion.

Top-level comments are listed newest first with their active replies
attached oldest first. Deleting a comment keeps its row (and its replies)
and replaces the content with a tombstone.
"""
import logging
from typing import Dict, List, Optional

from woodys.db import models, schemas
from woodys.db.repositories import CommentRepository, ProjectRepository, UserRepository
from woodys.errors import NotFoundError, UnauthorizedError
from woodys.utils.validation import normalize_pagination

logger = logging.getLogger(__name__)


def _with_author(comment: models.Comment, reply_count: int = 0, replies=None) -> schemas.CommentWithAuthor:
    author = comment.author
    return schemas.CommentWithAuthor(
        **schemas.Comment.model_validate(comment, from_attributes=True).model_dump(),
        username=author.username if author is not None else None,
        user_reputation=author.reputation if author is not None else None,
        reply_count=reply_count,
        replies=replies,
    )


class CommentService:
    def __init__(self, comments: CommentRepository, projects: ProjectRepository, users: UserRepository):
        self.comments = comments
        self.projects = projects
        self.users = users

    def _create(
        self,
        project_id: int,
        payload: schemas.CommentCreate,
        caller_id: Optional[int],
        parent_comment_id: Optional[int] = None,
    ) -> models.Comment:
        if caller_id is None:
            raise UnauthorizedError("an authenticated user is required to comment")
        self.users.get(caller_id)
        self.projects.get(project_id)
        comment = models.Comment(
            project_id=project_id,
            user_id=caller_id,
            parent_comment_id=parent_comment_id,
            content=payload.content,
            rating=payload.rating,
            status=models.CommentStatus.ACTIVE.value,
        )
        return self.comments.create(comment)

    def create_comment(self, project_id: int, payload: schemas.CommentCreate, caller_id: Optional[int]) -> models.Comment:
        comment = self._create(project_id, payload, caller_id)
        logger.info("comment_created id=%s project_id=%s", comment.id, project_id)
        return comment

    def create_reply(self, parent_comment_id: int, payload: schemas.CommentCreate, caller_id: Optional[int]) -> models.Comment:
        """Reply to ``parent_comment_id``; the reply joins the parent's project."""
        try:
            parent = self.comments.get(parent_comment_id)
        except NotFoundError as exc:
            raise exc.with_context("parent comment")
        reply = self._create(parent.project_id, payload, caller_id, parent_comment_id=parent.id)
        logger.info("comment_reply_created id=%s parent_id=%s", reply.id, parent.id)
        return reply

    def get_comment(self, comment_id: int) -> models.Comment:
        return self.comments.get(comment_id)

    def update_comment(self, comment_id: int, payload: schemas.CommentUpdate, caller_id: Optional[int]) -> models.Comment:
        comment = self.comments.get(comment_id)
        if not comment.can_be_edited_by(caller_id):
            if comment.is_deleted:
                raise UnauthorizedError("deleted comments cannot be edited")
            raise UnauthorizedError("only the author can edit this comment")
        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(comment, key, value)
        return self.comments.update(comment)

    def delete_comment(self, comment_id: int, caller_id: Optional[int]) -> models.Comment:
        comment = self.comments.get(comment_id)
        if not comment.can_be_deleted_by(caller_id):
            raise UnauthorizedError("only the author can delete this comment")
        deleted = self.comments.soft_delete(comment_id)
        logger.info("comment_deleted id=%s", comment_id)
        return deleted

    def get_project_comments(
        self, project_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[schemas.CommentWithAuthor]:
        limit, offset = normalize_pagination(limit, offset)
        self.projects.get(project_id)
        top_level = self.comments.list_top_level(project_id, limit, offset)
        replies_by_parent: Dict[int, List[models.Comment]] = self.comments.replies_for(c.id for c in top_level)
        result = []
        for comment in top_level:
            replies = [_with_author(reply) for reply in replies_by_parent.get(comment.id, [])]
            result.append(_with_author(comment, reply_count=len(replies), replies=replies))
        return result

    def get_comment_replies(
        self, comment_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[schemas.CommentWithAuthor]:
        limit, offset = normalize_pagination(limit, offset)
        # The parent may itself be deleted; its replies stay reachable
        self.comments.get(comment_id)
        return [_with_author(reply) for reply in self.comments.list_replies(comment_id, limit, offset)]

    def get_user_comments(self, user_id: int, limit: Optional[int] = None, offset: Optional[int] = None) -> List[models.Comment]:
        limit, offset = normalize_pagination(limit, offset)
        self.users.get(user_id)
        return self.comments.list_by_user(user_id, limit, offset)

    def count_project_comments(self, project_id: int) -> int:
        self.projects.get(project_id)
        return self.comments.count_for_project(project_id)
