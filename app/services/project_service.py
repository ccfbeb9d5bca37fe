# app/services/project_service.py
import logging
from typing import List

from sqlalchemy.orm import joinedload

from app.models.project import Project
from app.models.task import Task
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services.base import BaseService
from app.utils.policy import Action, ResourceKind, ensure_authorized
from app.utils.scoping import paginate, scope_to_owner

logger = logging.getLogger(__name__)


class ProjectService(BaseService):
    def list_projects(self, principal, skip: int = 0, limit: int = None) -> List[Project]:
        """Projects visible to the principal, owners eagerly loaded"""
        query = self.db.query(Project).options(joinedload(Project.owner))
        query = scope_to_owner(query, Project, principal, ResourceKind.PROJECT)
        return paginate(query.order_by(Project.id), skip, limit)

    def get_project(self, principal, project_id: int) -> Project:
        query = self.db.query(Project).options(joinedload(Project.owner))
        return self.get_authorized(principal, Project, project_id, ResourceKind.PROJECT, Action.VIEW, query=query)

    def get_project_tasks(self, principal, project: Project) -> List[Task]:
        """Tasks of an already authorized project, narrowed to the principal's own unless admin"""
        query = self.db.query(Task).options(joinedload(Task.owner)).filter(Task.project_id == project.id)
        query = scope_to_owner(query, Task, principal, ResourceKind.TASK)
        return query.order_by(Task.id).all()

    def create_project(self, principal, data: ProjectCreate) -> Project:
        ensure_authorized(principal, Action.CREATE, ResourceKind.PROJECT)
        project = Project(
            name=data.name,
            description=data.description,
            owner_id=principal.id,
        )
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        logger.info("User %s created project %s", principal.id, project.id)
        return project

    def update_project(self, principal, project_id: int, data: ProjectUpdate) -> Project:
        project = self.get_authorized(principal, Project, project_id, ResourceKind.PROJECT, Action.UPDATE)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(project, field, value)
        self.db.commit()
        self.db.refresh(project)
        logger.info("User %s updated project %s", principal.id, project.id)
        return project

    def delete_project(self, principal, project_id: int) -> None:
        """Delete a project together with its tasks"""
        project = self.get_authorized(principal, Project, project_id, ResourceKind.PROJECT, Action.DELETE)
        self.db.delete(project)
        self.db.commit()
        logger.info("User %s deleted project %s", principal.id, project_id)
