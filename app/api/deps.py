# app/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app import crud
from app.core import security
from app.core.config import settings
from app.database import get_db
from app.db.models.usuario import Usuario
from app.schemas.token import TokenDataSchemas

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/login/access-token"
)

__all__ = ["get_db", "get_current_user", "get_current_active_user"]


def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(reusable_oauth2)
) -> Usuario:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Não foi possível validar as credenciais",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = security.decode_token(token)
        # Refresh token não dá acesso aos endpoints
        if payload.get("type") != "access" or payload.get("sub") is None:
            raise credentials_exception
        token_data = TokenDataSchemas(email=payload.get("sub"))
    except (JWTError, ValidationError):
        raise credentials_exception

    user = crud.usuario.get_by_email(db, email=token_data.email)
    if not user:
        raise credentials_exception
    return user


def get_current_active_user(
    current_user: Usuario = Depends(get_current_user)
) -> Usuario:
    if not crud.usuario.is_active(current_user):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Usuário inativo")
    return current_user
