from .user import User, UserRole
from .project import Project
from .task import Task, TaskStatus
from .access_token import AccessToken
from .notification import Notification, NotificationType
