from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Literal, Union
from datetime import datetime
from app.models.task import TaskStatus
from app.schemas.user import UserSummary
from app.utils.dates import to_naive_utc, utcnow
from app.utils.policy import Action, ResourceKind, authorize

class TaskCreate(BaseModel):
    # owner is always the caller; an owner_id sent by the client is ignored
    title: str = Field(min_length=1, max_length=255)
    description: str
    status: TaskStatus
    project_id: Optional[int] = None
    deadline: Optional[datetime] = None

    @field_validator("deadline")
    @classmethod
    def deadline_not_in_past(cls, value):
        value = to_naive_utc(value)
        if value is not None and value.date() < utcnow().date():
            raise ValueError("deadline must be today or later")
        return value

class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    project_id: Optional[int] = None
    # Existing tasks may be moved into the past
    deadline: Optional[datetime] = None

    @field_validator("deadline")
    @classmethod
    def normalise_deadline(cls, value):
        return to_naive_utc(value)

class TaskDeadlineUpdate(BaseModel):
    deadline: Optional[datetime]

    @field_validator("deadline")
    @classmethod
    def normalise_deadline(cls, value):
        return to_naive_utc(value)

class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    status: TaskStatus
    deadline: Optional[datetime] = None
    project_id: Optional[int] = None

    # Admins see who owns the task, everyone else only ever sees their own
    owner: Union[UserSummary, Literal["You"]]

    created_at: datetime
    updated_at: Optional[datetime] = None

def present_task(task, principal) -> TaskOut:
    if authorize(principal, Action.VIEW_ANY, ResourceKind.TASK):
        owner = UserSummary.model_validate(task.owner)
    else:
        owner = "You"
    return TaskOut(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        deadline=task.deadline,
        project_id=task.project_id,
        owner=owner,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )

def present_tasks(tasks, principal) -> List[TaskOut]:
    return [present_task(task, principal) for task in tasks]
