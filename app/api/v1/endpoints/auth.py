# app/api/v1/endpoints/auth.py
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.api import deps
from app.core.exceptions import AutenticacaoError
from app.db.models.usuario import Usuario as DBUsuario
from app.schemas.token import RefreshTokenRequestSchemas, TokenSchemas
from app.schemas.usuario import UsuarioCreateSchemas, UsuarioSchemas
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/cadastro", response_model=UsuarioSchemas, status_code=status.HTTP_201_CREATED)
def cadastrar_usuario(
    *,
    db: Session = Depends(deps.get_db),
    user_in: UsuarioCreateSchemas
) -> Any:
    """
    Cria a conta do restaurante sem precisar estar logado.
    """
    try:
        return AuthService.cadastrar(db, usuario_in=user_in)
    except AutenticacaoError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.mensagem)


@router.post("/login/access-token", response_model=TokenSchemas)
def login_access_token(
    db: Session = Depends(deps.get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests.
    """
    try:
        return AuthService.autenticar(db, email=form_data.username, password=form_data.password)
    except AutenticacaoError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.mensagem)


@router.post("/refresh", response_model=TokenSchemas)
def refresh_token(
    *,
    db: Session = Depends(deps.get_db),
    token_in: RefreshTokenRequestSchemas
) -> Any:
    try:
        return AuthService.renovar(db, refresh_token=token_in.refresh_token)
    except AutenticacaoError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.mensagem,
            headers={"WWW-Authenticate": "Bearer"},
        )


@router.get("/me", response_model=UsuarioSchemas)
def read_user_me(current_user: DBUsuario = Depends(deps.get_current_active_user)) -> Any:
    """
    Get current user.
    """
    return current_user
