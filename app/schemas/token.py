# app/schemas/token.py
from typing import Optional

from pydantic import BaseModel


class TokenSchemas(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: Optional[str] = None


class TokenDataSchemas(BaseModel):
    email: Optional[str] = None


class RefreshTokenRequestSchemas(BaseModel):
    refresh_token: str
