from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from .user import UserSummary
from .task import TaskOut

class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str

class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None

class ProjectOut(BaseModel):
    id: int
    name: str
    description: str
    owner: UserSummary
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }

class ProjectDetail(ProjectOut):
    tasks: List[TaskOut] = []
