"""
Comments API endpoints, including replies.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from woodys.api.deps import get_caller_id, get_services
from woodys.db import schemas
from woodys.services import Services

router = APIRouter(tags=["comments"])


@router.get("/projects/{project_id}/comments", response_model=list[schemas.CommentWithAuthor])
def get_project_comments(
    project_id: int,
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.comments.get_project_comments(project_id, limit, offset)


@router.post(
    "/projects/{project_id}/comments",
    response_model=schemas.Comment,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    project_id: int,
    payload: schemas.CommentCreate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.comments.create_comment(project_id, payload, caller_id)


@router.get("/projects/{project_id}/comments/count")
def count_project_comments(project_id: int, services: Services = Depends(get_services)):
    return {"project_id": project_id, "count": services.comments.count_project_comments(project_id)}


@router.get("/comments/{comment_id}", response_model=schemas.Comment)
def get_comment(comment_id: int, services: Services = Depends(get_services)):
    return services.comments.get_comment(comment_id)


@router.put("/comments/{comment_id}", response_model=schemas.Comment)
def update_comment(
    comment_id: int,
    payload: schemas.CommentUpdate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.comments.update_comment(comment_id, payload, caller_id)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    services.comments.delete_comment(comment_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/comments/{comment_id}/reply",
    response_model=schemas.Comment,
    status_code=status.HTTP_201_CREATED,
)
def create_reply(
    comment_id: int,
    payload: schemas.CommentCreate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.comments.create_reply(comment_id, payload, caller_id)


@router.get("/comments/{comment_id}/replies", response_model=list[schemas.CommentWithAuthor])
def get_comment_replies(
    comment_id: int,
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.comments.get_comment_replies(comment_id, limit, offset)
