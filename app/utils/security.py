# app/utils/security.py
import uuid
from datetime import timedelta
from typing import Tuple

from jose import jwt
from passlib.context import CryptContext

from app.config.settings import Settings
from app.utils.dates import utcnow

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta = None) -> Tuple[str, str, object]:
    """Sign a bearer token; returns (token, jti, expires_at) so the caller can record it"""
    expires_at = utcnow() + (expires_delta or timedelta(minutes=Settings.AUTH["access_token_expire_minutes"]))
    jti = uuid.uuid4().hex
    to_encode = dict(data)
    to_encode.update({"exp": expires_at, "jti": jti})
    token = jwt.encode(to_encode, Settings.AUTH["secret_key"], algorithm=Settings.AUTH["algorithm"])
    return token, jti, expires_at
