# app/api/v1/endpoints/mesas.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.logging import logger
from app.db.models.mesa import StatusMesa
from app.db.models.usuario import Usuario
from app.schemas.mesa import MesaConfigurarSchemas, MesaSchemas, MesasResumoSchemas, MesaStatusUpdateSchemas

router = APIRouter()


def _resumo(mesas) -> MesasResumoSchemas:
    contagem = crud.mesa.contar_por_status(mesas)
    return MesasResumoSchemas(
        mesas=[MesaSchemas.model_validate(m) for m in mesas],
        total=len(mesas),
        livres=contagem[StatusMesa.LIVRE],
        ocupadas=contagem[StatusMesa.OCUPADA],
        reservadas=contagem[StatusMesa.RESERVADA],
    )


@router.get("/", response_model=MesasResumoSchemas)
def read_mesas(
    status_mesa: Optional[StatusMesa] = None,
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Lista as mesas por número, com a contagem por status.
    """
    mesas = crud.mesa.get_multi(db, usuario_id=current_user.id)
    resumo = _resumo(mesas)
    if status_mesa:
        resumo.mesas = [m for m in resumo.mesas if m.status == status_mesa]
    return resumo


@router.post("/configurar", response_model=MesasResumoSchemas)
def configurar_mesas(
    *,
    db: Session = Depends(deps.get_db),
    config_in: MesaConfigurarSchemas,
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Recria as mesas 1..quantidade, todas livres.
    """
    try:
        mesas = crud.mesa.configurar(db, usuario_id=current_user.id, quantidade=config_in.quantidade)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info(f"{len(mesas)} mesa(s) configuradas por {current_user.email}")
    return _resumo(mesas)


@router.delete("/", status_code=status.HTTP_200_OK)
def delete_mesas(
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
):
    removidas = crud.mesa.remove_all(db, usuario_id=current_user.id)
    return {"removidas": removidas}


@router.put("/{numero}/status", response_model=MesaSchemas)
def update_status_mesa(
    *,
    db: Session = Depends(deps.get_db),
    numero: int,
    status_in: MesaStatusUpdateSchemas,
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Alterna a mesa entre livre e reservada.
    """
    mesa = crud.mesa.get_by_numero(db, usuario_id=current_user.id, numero=numero)
    if not mesa:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Mesa não encontrada")
    try:
        return crud.mesa.alterar_status(db, db_obj=mesa, status=status_in.status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
