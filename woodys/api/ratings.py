"""
Ratings API endpoints, nested under a project.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from woodys.api.deps import get_caller_id, get_services
from woodys.db import schemas
from woodys.services import Services

router = APIRouter(prefix="/projects/{project_id}/ratings", tags=["ratings"])


@router.post("", response_model=schemas.Rating, status_code=status.HTTP_201_CREATED)
def create_rating(
    project_id: int,
    payload: schemas.RatingCreate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.ratings.create_rating(project_id, payload, caller_id)


@router.put("", response_model=schemas.Rating)
def update_rating(
    project_id: int,
    payload: schemas.RatingUpdate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.ratings.update_rating(project_id, payload, caller_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_rating(
    project_id: int,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    services.ratings.delete_rating(project_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", response_model=list[schemas.RatingWithAuthor])
def get_project_ratings(
    project_id: int,
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.ratings.get_project_ratings(project_id, limit, offset)


@router.get("/me", response_model=schemas.Rating)
def get_my_rating(
    project_id: int,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.ratings.get_user_rating(project_id, caller_id)


@router.get("/stats", response_model=schemas.RatingStats)
def get_rating_stats(project_id: int, services: Services = Depends(get_services)):
    return services.ratings.get_project_rating_stats(project_id)


@router.get("/trends", response_model=list[schemas.RatingTrendPoint])
def get_rating_trends(
    project_id: int,
    days: int = Query(default=30),
    services: Services = Depends(get_services),
):
    return services.ratings.get_rating_trends(project_id, days)
