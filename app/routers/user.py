# app/routers/user.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from app.config.settings import Settings
from app.database import get_db
from app.routers.task import get_task_service
from app.schemas.task import TaskOut, present_tasks
from app.schemas.user import UserCreate, UserOut, UserUpdate
from app.services.task_service import TaskService
from app.services.user_service import UserService
from app.utils.auth import Principal, get_current_principal

router = APIRouter()


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("/", response_model=List[UserOut])
def get_all_users(
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Get all users - admin only"""
    return service.list_users(principal)


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    user: UserCreate,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    return service.create_user(principal, user)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(principal, user_id)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Update a profile - own profile or admin; only admins change roles"""
    return service.update_user(principal, user_id, user_update)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(principal, user_id)
    return None


@router.get("/{user_id}/tasks", response_model=List[TaskOut])
def get_user_tasks(
    user_id: int,
    skip: int = Query(0, ge=0),
    limit: int = Query(Settings.PAGINATION["page_size"], ge=1),
    principal: Principal = Depends(get_current_principal),
    service: TaskService = Depends(get_task_service),
):
    return present_tasks(service.list_tasks_by_user(principal, user_id, skip, limit), principal)
