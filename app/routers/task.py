# app/routers/task.py
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from app.config.settings import Settings
from app.database import get_db
from app.schemas.task import TaskCreate, TaskUpdate, TaskDeadlineUpdate, TaskOut, present_task, present_tasks
from app.services.task_events import get_task_events
from app.services.task_service import TaskService
from app.utils.auth import Principal, get_current_principal

router = APIRouter(prefix="/tasks")

PAGE_SIZE = Settings.PAGINATION["page_size"]


def get_task_service(background_tasks: BackgroundTasks, db: Session = Depends(get_db)) -> TaskService:
    # Task-updated listeners run after the response has been sent
    return TaskService(db, events=get_task_events(schedule=background_tasks.add_task))


@router.get("/", response_model=List[TaskOut])
def get_all_tasks(
    skip: int = Query(0, ge=0),
    limit: int = Query(PAGE_SIZE, ge=1),
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    """Get tasks visible to the caller

    - admin: every task
    - member: only tasks they own
    """
    return present_tasks(service.list_tasks(principal, skip, limit), principal)


@router.get("/overdue", response_model=List[TaskOut])
def get_overdue_tasks(
    skip: int = Query(0, ge=0),
    limit: int = Query(PAGE_SIZE, ge=1),
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    """Tasks past their deadline that are not done, earliest deadline first"""
    return present_tasks(service.list_overdue_tasks(principal, skip, limit), principal)


@router.post("/", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    return present_task(service.create_task(principal, task_data), principal)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    return present_task(service.get_task(principal, task_id), principal)


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    return present_task(service.update_task(principal, task_id, task_update), principal)


@router.patch("/{task_id}/deadline", response_model=TaskOut)
def update_task_deadline(
    task_id: int,
    deadline_update: TaskDeadlineUpdate,
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    """Change only the deadline; other fields need not be resent"""
    return present_task(service.update_deadline(principal, task_id, deadline_update), principal)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    service.delete_task(principal, task_id)
    return None
