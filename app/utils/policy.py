# app/utils/policy.py
"""
Authorization rules for users, projects and tasks.

Rules are evaluated in order and the first match decides:

1. Admins may do anything.
2. Any authenticated caller may create a project or a task.
3. Only admins may list users.
4. view/update/delete require ownership of the resource. Users are
   deleted by admins only.
5. Everything else is denied.
"""

import enum
import logging
from datetime import datetime
from operator import attrgetter
from typing import Any, Callable, Optional

from app.utils.dates import utcnow
from app.utils.errors import Forbidden, OVERDUE_TASK_DETAIL

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    VIEW_ANY = "viewAny"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    ASSIGN_ROLE = "assignRole"


class ResourceKind(str, enum.Enum):
    USER = "user"
    PROJECT = "project"
    TASK = "task"


OWNED_ACTIONS = frozenset({Action.VIEW, Action.UPDATE, Action.DELETE})

# Which attribute carries the owning user's id
OWNER_ACCESSORS = {
    ResourceKind.USER: attrgetter("id"),
    ResourceKind.PROJECT: attrgetter("owner_id"),
    ResourceKind.TASK: attrgetter("owner_id"),
}


def owns(principal, resource: Any, accessor: Callable[[Any], Any]) -> bool:
    return resource is not None and accessor(resource) == principal.id


def authorize(principal, action: Action, kind: ResourceKind, resource: Any = None) -> bool:
    if principal.is_admin:
        return True

    if action == Action.CREATE and kind in (ResourceKind.PROJECT, ResourceKind.TASK):
        return True

    if action == Action.VIEW_ANY and kind == ResourceKind.USER:
        return False

    if action in OWNED_ACTIONS:
        if kind == ResourceKind.USER and action == Action.DELETE:
            return False
        return owns(principal, resource, OWNER_ACCESSORS[kind])

    return False


def ensure_authorized(principal, action: Action, kind: ResourceKind, resource: Any = None) -> None:
    """Raise Forbidden unless the principal may perform the action"""
    if not authorize(principal, action, kind, resource):
        logger.debug(
            "Denied %s on %s %s for user %s",
            action.value, kind.value, getattr(resource, "id", None), principal.id,
        )
        raise Forbidden()


def ensure_can_edit_overdue(principal, task, now: Optional[datetime] = None) -> None:
    """Members may not change or remove a task once its deadline has passed.

    Runs after the ownership check, so a non-owner never learns that a task
    is overdue.
    """
    if principal.is_admin or task.deadline is None:
        return
    if task.deadline < (now or utcnow()):
        logger.debug("Denied edit of overdue task %s for user %s", task.id, principal.id)
        raise Forbidden(OVERDUE_TASK_DETAIL)
