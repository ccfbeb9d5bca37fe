# app/services/user_service.py
import logging
from typing import List

from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate
from app.services.base import BaseService
from app.utils.errors import Conflict
from app.utils.policy import Action, ResourceKind, ensure_authorized
from app.utils.security import hash_password

logger = logging.getLogger(__name__)


class UserService(BaseService):
    def email_taken(self, email: str, exclude_id: int = None) -> bool:
        query = self.db.query(User).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def list_users(self, principal) -> List[User]:
        ensure_authorized(principal, Action.VIEW_ANY, ResourceKind.USER)
        return self.db.query(User).order_by(User.id).all()

    def get_user(self, principal, user_id: int) -> User:
        return self.get_authorized(principal, User, user_id, ResourceKind.USER, Action.VIEW)

    def create_user(self, principal, data: UserCreate) -> User:
        """Create an account on someone else's behalf (admins only)"""
        ensure_authorized(principal, Action.CREATE, ResourceKind.USER)
        if self.email_taken(data.email):
            raise Conflict("Email already registered")

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=hash_password(data.password),
            role=data.role,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User %s created user %s with role %s", principal.id, user.id, user.role)
        return user

    def update_user(self, principal, user_id: int, data: UserUpdate) -> User:
        user = self.get_authorized(principal, User, user_id, ResourceKind.USER, Action.UPDATE)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        # Nobody promotes themselves; role changes go through an admin
        if "role" in update_data and update_data["role"] != user.role:
            ensure_authorized(principal, Action.ASSIGN_ROLE, ResourceKind.USER, user)

        if "email" in update_data and self.email_taken(update_data["email"], exclude_id=user.id):
            raise Conflict("Email already registered")

        # Handle password update separately (hash it if provided)
        if "password" in update_data:
            user.hashed_password = hash_password(update_data.pop("password"))

        for field, value in update_data.items():
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        logger.info("User %s updated user %s", principal.id, user.id)
        return user

    def delete_user(self, principal, user_id: int) -> None:
        """Delete a user along with their projects, tasks and tokens"""
        user = self.get_authorized(principal, User, user_id, ResourceKind.USER, Action.DELETE)
        self.db.delete(user)
        self.db.commit()
        logger.info("User %s deleted user %s", principal.id, user_id)
