# app/services/task_events.py
"""
Task-updated events and the overdue-deadline listener.

Events are fire-and-forget: the dispatcher hands listeners to a scheduler
(FastAPI's BackgroundTasks.add_task inside a request) and a failing
listener is logged, never propagated to the request that mutated the task.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models.task import Task, TaskStatus
from app.utils.dates import utcnow
from app.utils.notifications import create_task_overdue_notification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskUpdated:
    """Snapshot of a task taken right after it was written"""
    task_id: int
    owner_id: int
    title: str
    status: str
    deadline: Optional[datetime]

    @classmethod
    def from_task(cls, task: Task) -> "TaskUpdated":
        return cls(
            task_id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            status=task.status,
            deadline=task.deadline,
        )

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        return (
            self.deadline is not None
            and self.deadline < (now or utcnow())
            and self.status != TaskStatus.DONE.value
        )


Listener = Callable[[TaskUpdated], None]


class TaskEventDispatcher:
    def __init__(self, listeners: List[Listener] = None, schedule: Callable = None):
        self.listeners = list(listeners or [])
        # schedule(fn, *args); runs inline when none is given
        self.schedule = schedule

    def task_updated(self, task: Task) -> None:
        event = TaskUpdated.from_task(task)
        for listener in self.listeners:
            if self.schedule is not None:
                self.schedule(_run_listener, listener, event)
            else:
                _run_listener(listener, event)


def _run_listener(listener: Listener, event: TaskUpdated) -> None:
    try:
        listener(event)
    except Exception:
        logger.exception("Task-updated listener %s failed for task %s", getattr(listener, "__name__", listener), event.task_id)


def check_task_deadline(event: TaskUpdated, session_factory: Callable[[], Session] = None) -> None:
    """Notify the owner when an updated task is overdue and not done"""
    if not event.is_overdue():
        return

    db = (session_factory or SessionLocal)()
    try:
        create_task_overdue_notification(db, event.owner_id, event.task_id, event.title, event.deadline)
    finally:
        db.close()

    logger.info(
        "Task %s is overdue; notified owner %s (status=%s, deadline=%s)",
        event.task_id, event.owner_id, event.status, event.deadline,
    )


def get_task_events(schedule: Callable = None) -> TaskEventDispatcher:
    return TaskEventDispatcher(listeners=[check_task_deadline], schedule=schedule)
