# app/utils/auth.py
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.database import get_db
from app.models.access_token import AccessToken
from app.models.user import User, UserRole
from app.utils.dates import utcnow
from app.utils.errors import Unauthenticated

logger = logging.getLogger(__name__)

# Missing headers are reported through Unauthenticated, not FastAPI's own 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login", auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, passed explicitly into every service call"""
    id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, role=user.role)


def decode_token(token: str) -> Optional[dict]:
    """Verify JWT token and return payload without raising exceptions"""
    try:
        return jwt.decode(token, Settings.AUTH["secret_key"], algorithms=[Settings.AUTH["algorithm"]])
    except JWTError:
        return None


def resolve_principal(db: Session, token: Optional[str]) -> Principal:
    """Map a bearer token to the calling user or fail closed"""
    if not token:
        raise Unauthenticated()

    payload = decode_token(token)
    if payload is None:
        raise Unauthenticated("Could not validate credentials")

    jti = payload.get("jti")
    subject = payload.get("sub")
    if not jti or subject is None:
        raise Unauthenticated("Could not validate credentials")

    record = db.query(AccessToken).filter(AccessToken.jti == jti).first()
    if record is None or record.expires_at <= utcnow() or str(record.user_id) != str(subject):
        logger.debug("Rejected revoked or expired token for subject %s", subject)
        raise Unauthenticated("Could not validate credentials")

    user = db.query(User).filter(User.id == record.user_id).first()
    if user is None:
        raise Unauthenticated("Could not validate credentials")

    return Principal.from_user(user)


def get_current_principal(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> Principal:
    return resolve_principal(db, token)

