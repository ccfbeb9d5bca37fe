# app/services/task_service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from app.models.project import Project
from app.models.task import Task, TaskStatus
from app.models.user import User
from app.schemas.task import TaskCreate, TaskDeadlineUpdate, TaskUpdate
from app.services.base import BaseService
from app.services.task_events import TaskEventDispatcher
from app.utils.dates import utcnow
from app.utils.policy import Action, ResourceKind, ensure_authorized, ensure_can_edit_overdue
from app.utils.scoping import paginate, scope_to_owner

logger = logging.getLogger(__name__)

# Fields that may be explicitly cleared by an update
NULLABLE_FIELDS = {"deadline", "project_id"}


class TaskService(BaseService):
    def __init__(self, db: Session, events: Optional[TaskEventDispatcher] = None):
        super().__init__(db)
        self.events = events or TaskEventDispatcher()

    def _base_query(self):
        return self.db.query(Task).options(joinedload(Task.owner), joinedload(Task.project))

    def _scoped(self, principal):
        return scope_to_owner(self._base_query(), Task, principal, ResourceKind.TASK)

    def list_tasks(self, principal, skip: int = 0, limit: int = None) -> List[Task]:
        return paginate(self._scoped(principal).order_by(Task.id), skip, limit)

    def list_overdue_tasks(self, principal, skip: int = 0, limit: int = None) -> List[Task]:
        """Tasks past their deadline and not done, earliest deadline first"""
        query = self._scoped(principal).filter(
            Task.deadline.isnot(None),
            Task.deadline < utcnow(),
            Task.status != TaskStatus.DONE.value,
        )
        return paginate(query.order_by(Task.deadline.asc(), Task.id), skip, limit)

    def list_tasks_by_user(self, principal, user_id: int, skip: int = 0, limit: int = None) -> List[Task]:
        # Access to the user gates the listing: 404 if missing, 403 if not visible
        self.get_authorized(principal, User, user_id, ResourceKind.USER, Action.VIEW)
        query = self._scoped(principal).filter(Task.owner_id == user_id)
        return paginate(query.order_by(Task.id), skip, limit)

    def list_tasks_by_project(self, principal, project_id: int, skip: int = 0, limit: int = None) -> List[Task]:
        self.get_authorized(principal, Project, project_id, ResourceKind.PROJECT, Action.VIEW)
        query = self._scoped(principal).filter(Task.project_id == project_id)
        return paginate(query.order_by(Task.id), skip, limit)

    def get_task(self, principal, task_id: int) -> Task:
        return self.get_authorized(principal, Task, task_id, ResourceKind.TASK, Action.VIEW, query=self._base_query())

    def _check_project(self, principal, project_id: Optional[int]) -> None:
        """A task can only be filed under a project the principal can see"""
        if project_id is None:
            return
        self.get_authorized(principal, Project, project_id, ResourceKind.PROJECT, Action.VIEW)

    def create_task(self, principal, data: TaskCreate) -> Task:
        ensure_authorized(principal, Action.CREATE, ResourceKind.TASK)
        self._check_project(principal, data.project_id)
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status.value,
            deadline=data.deadline,
            project_id=data.project_id,
            owner_id=principal.id,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        logger.info("User %s created task %s", principal.id, task.id)
        self.events.task_updated(task)
        return task

    def _get_editable(self, principal, task_id: int, action: Action) -> Task:
        task = self.get_authorized(principal, Task, task_id, ResourceKind.TASK, action)
        ensure_can_edit_overdue(principal, task)
        return task

    def _apply(self, principal, task: Task, changes: dict) -> Task:
        for field, value in changes.items():
            if field == "status" and value is not None:
                value = TaskStatus(value).value
            setattr(task, field, value)
        self.db.commit()
        self.db.refresh(task)
        logger.info("User %s updated task %s (%s)", principal.id, task.id, ", ".join(sorted(changes)) or "no changes")
        self.events.task_updated(task)
        return task

    def update_task(self, principal, task_id: int, data: TaskUpdate) -> Task:
        task = self._get_editable(principal, task_id, Action.UPDATE)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if changes.get("project_id") is not None and changes["project_id"] != task.project_id:
            self._check_project(principal, changes["project_id"])
        return self._apply(principal, task, changes)

    def update_deadline(self, principal, task_id: int, data: TaskDeadlineUpdate) -> Task:
        task = self._get_editable(principal, task_id, Action.UPDATE)
        return self._apply(principal, task, {"deadline": data.deadline})

    def delete_task(self, principal, task_id: int) -> None:
        task = self._get_editable(principal, task_id, Action.DELETE)
        self.db.delete(task)
        self.db.commit()
        logger.info("User %s deleted task %s", principal.id, task_id)
