from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api import deps
from app.db.models.usuario import Usuario
from app.schemas.estatistica import QuadroSchemas
from app.services.sincronizacao_service import carregar_quadro

router = APIRouter()


@router.get("/", response_model=QuadroSchemas)
def read_quadro(
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Estado completo do quadro ao abrir a aplicação.
    Verifica o reset diário antes de carregar os pedidos.
    """
    return carregar_quadro(db, usuario=current_user)
