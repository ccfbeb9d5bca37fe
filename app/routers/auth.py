from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.tokens import Token
from app.schemas.user import UserLogin, UserRegister
from app.services.auth_service import AuthService
from app.utils.auth import Principal, get_current_principal

router = APIRouter()


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user: UserRegister, service: AuthService = Depends(get_auth_service)):
    token = service.register(user)
    return Token(access_token=token, message="User Account Created Successfully")


@router.post("/login", response_model=Token)
def login(user: UserLogin, service: AuthService = Depends(get_auth_service)):
    return Token(access_token=service.login(user))


@router.post("/logout")
def logout(
    principal: Principal = Depends(get_current_principal),
    service: AuthService = Depends(get_auth_service),
):
    service.logout(principal)
    return {"message": "Logged out successfully"}
