# app/utils/errors.py
"""
Failure taxonomy shared by the principal resolver, policy engine and services.

These carry no transport details; main.py maps them to status codes.
"""


class ServiceError(Exception):
    default_detail = "Request failed"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(ServiceError):
    default_detail = "Unauthenticated."


class Forbidden(ServiceError):
    default_detail = "Unauthorized"


class NotFound(ServiceError):
    default_detail = "Not found"

    @classmethod
    def for_kind(cls, kind: str) -> "NotFound":
        return cls(f"{kind.capitalize()} not found")


class Conflict(ServiceError):
    default_detail = "Conflict"


OVERDUE_TASK_DETAIL = "Unauthorized to edit overdue tasks"
