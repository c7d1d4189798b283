"""
Users API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from woodys.api.deps import get_caller_id, get_optional_caller_id, get_services
from woodys.db import schemas
from woodys.services import Services

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user(payload: schemas.UserCreate, services: Services = Depends(get_services)):
    return services.users.create_user(payload)


@router.get("", response_model=list[schemas.User])
def list_users(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.users.list_users(limit, offset)


@router.get("/uid/{firebase_uid}", response_model=schemas.User)
def get_user_by_firebase_uid(firebase_uid: str, services: Services = Depends(get_services)):
    return services.users.get_user_by_firebase_uid(firebase_uid)


@router.get("/{user_id}", response_model=schemas.User)
def get_user(user_id: int, services: Services = Depends(get_services)):
    return services.users.get_user(user_id)


@router.put("/{user_id}", response_model=schemas.User)
def update_user(
    user_id: int,
    payload: schemas.UserUpdate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.users.update_user(user_id, payload, caller_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    services.users.delete_user(user_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/projects", response_model=list[schemas.Project])
def get_user_projects(
    user_id: int,
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.users.get_user_projects(user_id, limit, offset)


@router.get("/{user_id}/ratings", response_model=list[schemas.Rating])
def get_user_ratings(
    user_id: int,
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.users.get_user_ratings(user_id, limit, offset)


@router.get("/{user_id}/comments", response_model=list[schemas.Comment])
def get_user_comments(
    user_id: int,
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.comments.get_user_comments(user_id, limit, offset)


@router.get("/{user_id}/project-lists", response_model=list[schemas.ProjectList])
def get_user_project_lists(
    user_id: int,
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
    caller_id: Optional[int] = Depends(get_optional_caller_id),
):
    return services.project_lists.get_user_project_lists(user_id, caller_id, limit, offset)


@router.get("/{user_id}/reputation", response_model=schemas.UserReputation)
def get_user_reputation(user_id: int, services: Services = Depends(get_services)):
    return schemas.UserReputation(user_id=user_id, reputation=services.users.calculate_reputation(user_id))
