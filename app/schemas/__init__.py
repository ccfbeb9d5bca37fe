from .user import UserRegister, UserCreate, UserLogin, UserOut, UserSummary, UserUpdate
from .tokens import Token
from .task import TaskCreate, TaskUpdate, TaskDeadlineUpdate, TaskOut, present_task, present_tasks
from .project import ProjectCreate, ProjectUpdate, ProjectOut, ProjectDetail
from .notification import NotificationOut
