# app/routers/project.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from app.config.settings import Settings
from app.database import get_db
from app.routers.task import get_task_service
from app.schemas.project import ProjectCreate, ProjectUpdate, ProjectOut, ProjectDetail
from app.schemas.task import TaskOut, present_tasks
from app.services.project_service import ProjectService
from app.services.task_service import TaskService
from app.utils.auth import Principal, get_current_principal

router = APIRouter()

PAGE_SIZE = Settings.PAGINATION["page_size"]


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


@router.get("/", response_model=List[ProjectOut])
def get_projects(
    skip: int = Query(0, ge=0),
    limit: int = Query(PAGE_SIZE, ge=1),
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    """Admins see every project, members only their own"""
    return service.list_projects(principal, skip, limit)


@router.post("/", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    return service.create_project(principal, project_data)


@router.get("/{project_id}", response_model=ProjectDetail)
def get_project(
    project_id: int,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    project = service.get_project(principal, project_id)
    detail = ProjectOut.model_validate(project).model_dump()
    tasks = service.get_project_tasks(principal, project)
    return ProjectDetail(**detail, tasks=present_tasks(tasks, principal))


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: int,
    project_update: ProjectUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    return service.update_project(principal, project_id, project_update)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    principal: Principal = Depends(get_current_principal),
    service: ProjectService = Depends(get_project_service),
):
    service.delete_project(principal, project_id)
    return None


@router.get("/{project_id}/tasks", response_model=List[TaskOut])
def get_project_tasks(
    project_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(PAGE_SIZE, ge=1),
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    """Tasks filed under a project; callers who cannot view the project get 403"""
    return present_tasks(service.list_tasks_by_project(principal, project_id, skip, limit), principal)
