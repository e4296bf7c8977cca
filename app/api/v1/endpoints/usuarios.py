from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.db.models.usuario import Usuario as DBUsuario
from app.schemas.usuario import PerfilUpdateSchemas, UsuarioSchemas

router = APIRouter()


@router.get("/me", response_model=UsuarioSchemas)
def read_usuario_me(current_user: DBUsuario = Depends(deps.get_current_active_user)) -> Any:
    return current_user


@router.get("/me/perfil", response_model=UsuarioSchemas)
def read_perfil(current_user: DBUsuario = Depends(deps.get_current_active_user)) -> Any:
    """
    Perfil do usuário logado (nome e sobrenome)
    """
    return current_user


@router.put("/me/perfil", response_model=UsuarioSchemas)
def update_perfil(
    *,
    db: Session = Depends(deps.get_db),
    perfil_in: PerfilUpdateSchemas,
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Atualiza o perfil do usuário logado
    """
    return crud.usuario.update_perfil(db, db_obj=current_user, obj_in=perfil_in)
