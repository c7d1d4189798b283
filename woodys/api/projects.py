"""
Projects API endpoints: CRUD plus discovery (search, popular, recent, top rated).
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from woodys.api.deps import get_caller_id, get_services
from woodys.db import schemas
from woodys.services import Services

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=schemas.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: schemas.ProjectCreate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.projects.create_project(payload, caller_id)


@router.get("", response_model=list[schemas.Project])
def list_projects(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.projects.list_projects(limit, offset)


@router.get("/search", response_model=list[schemas.Project])
def search_projects(
    q: Optional[str] = Query(default=None),
    style: List[str] = Query(default=[]),
    environment: List[str] = Query(default=[]),
    materials: List[str] = Query(default=[]),
    tools: List[str] = Query(default=[]),
    max_time_to_build: Optional[int] = Query(default=None),
    min_rating: Optional[float] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    filters = schemas.ProjectSearchFilters(
        q=q,
        style=style,
        environment=environment,
        materials=materials,
        tools=tools,
        max_time_to_build=max_time_to_build,
        min_rating=min_rating,
        limit=limit,
        offset=offset,
    )
    return services.projects.search_projects(filters)


@router.get("/popular", response_model=list[schemas.Project])
def get_popular_projects(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.projects.get_popular_projects(limit, offset)


@router.get("/recent", response_model=list[schemas.Project])
def get_recent_projects(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.projects.get_recent_projects(limit, offset)


@router.get("/top-rated", response_model=list[schemas.Project])
def get_top_rated_projects(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.projects.get_top_rated_projects(limit, offset)


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(project_id: int, services: Services = Depends(get_services)):
    return services.projects.get_project(project_id)


@router.put("/{project_id}", response_model=schemas.Project)
def update_project(
    project_id: int,
    payload: schemas.ProjectUpdate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.projects.update_project(project_id, payload, caller_id)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    services.projects.delete_project(project_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
