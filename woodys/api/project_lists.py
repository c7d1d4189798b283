"""
Project lists API endpoints: list CRUD and membership.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from woodys.api.deps import get_caller_id, get_optional_caller_id, get_services
from woodys.db import schemas
from woodys.services import Services

router = APIRouter(prefix="/project-lists", tags=["project-lists"])


@router.post("", response_model=schemas.ProjectList, status_code=status.HTTP_201_CREATED)
def create_project_list(
    payload: schemas.ProjectListCreate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.project_lists.create_project_list(payload, caller_id)


@router.get("/public", response_model=list[schemas.ProjectList])
def get_public_project_lists(
    limit: Optional[int] = Query(default=None),
    offset: Optional[int] = Query(default=None),
    services: Services = Depends(get_services),
):
    return services.project_lists.get_public_project_lists(limit, offset)


@router.get("/{list_id}", response_model=schemas.ProjectListDetail)
def get_project_list(
    list_id: int,
    services: Services = Depends(get_services),
    caller_id: Optional[int] = Depends(get_optional_caller_id),
):
    return services.project_lists.get_project_list(list_id, caller_id)


@router.put("/{list_id}", response_model=schemas.ProjectList)
def update_project_list(
    list_id: int,
    payload: schemas.ProjectListUpdate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    return services.project_lists.update_project_list(list_id, payload, caller_id)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project_list(
    list_id: int,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    services.project_lists.delete_project_list(list_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{list_id}/projects",
    response_model=schemas.ProjectListMembership,
    status_code=status.HTTP_201_CREATED,
)
def add_project_to_list(
    list_id: int,
    payload: schemas.ProjectListItemCreate,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    item = services.project_lists.add_project_to_list(list_id, payload.project_id, caller_id)
    return schemas.ProjectListMembership(project_list_id=item.project_list_id, project_id=item.project_id, in_list=True)


@router.delete("/{list_id}/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_project_from_list(
    list_id: int,
    project_id: int,
    services: Services = Depends(get_services),
    caller_id: int = Depends(get_caller_id),
):
    services.project_lists.remove_project_from_list(list_id, project_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{list_id}/projects/{project_id}", response_model=schemas.ProjectListMembership)
def check_project_in_list(
    list_id: int,
    project_id: int,
    services: Services = Depends(get_services),
    caller_id: Optional[int] = Depends(get_optional_caller_id),
):
    in_list = services.project_lists.is_project_in_list(list_id, project_id, caller_id)
    return schemas.ProjectListMembership(project_list_id=list_id, project_id=project_id, in_list=in_list)
