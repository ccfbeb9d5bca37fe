# app/services/auth_service.py
import logging

from app.models.access_token import AccessToken
from app.models.user import User, UserRole
from app.schemas.user import UserLogin, UserRegister
from app.services.base import BaseService
from app.utils.errors import Conflict, Unauthenticated
from app.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    def issue_token(self, user: User) -> str:
        token, jti, expires_at = create_access_token(data={"sub": str(user.id)})
        self.db.add(AccessToken(user_id=user.id, jti=jti, expires_at=expires_at))
        self.db.commit()
        return token

    def register(self, data: UserRegister) -> str:
        """Self-service sign up; new accounts are always members"""
        if self.db.query(User).filter(User.email == data.email).first():
            raise Conflict("Email already registered")

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=hash_password(data.password),
            role=UserRole.MEMBER.value,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Registered user %s", user.id)
        return self.issue_token(user)

    def login(self, data: UserLogin) -> str:
        user = self.db.query(User).filter(User.email == data.email).first()
        if not user or not verify_password(data.password, user.hashed_password):
            logger.info("Failed login for %s", data.email)
            raise Unauthenticated("Invalid login credentials")
        logger.info("User %s logged in", user.id)
        return self.issue_token(user)

    def logout(self, principal) -> int:
        """Revoke every token the principal holds"""
        revoked = self.db.query(AccessToken).filter(AccessToken.user_id == principal.id).delete()
        self.db.commit()
        logger.info("User %s logged out (%s tokens revoked)", principal.id, revoked)
        return revoked
