# app/schemas/tokens.py
from typing import Optional

from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    message: Optional[str] = None
