from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.logging import logger
from app.core.relogio import data_local
from app.db.models.usuario import Usuario
from app.schemas.estatistica import AberturaCaixaSchemas, EstatisticaDiariaSchemas, ResetResultadoSchemas
from app.services import estatistica_service
from app.services.redis_service import canal_do_quadro, redis_client
from app.services.sincronizacao_service import sincronizar_estatisticas, verificar_e_resetar

router = APIRouter()


@router.get("/hoje", response_model=EstatisticaDiariaSchemas)
def read_estatisticas_hoje(
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    stats = crud.estatistica.get_do_dia(db, usuario_id=current_user.id, dia=data_local())
    if not stats:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Caixa de hoje ainda não foi aberto")
    return stats


@router.post("/caixa", response_model=EstatisticaDiariaSchemas, status_code=status.HTTP_201_CREATED)
def abrir_caixa(
    *,
    db: Session = Depends(deps.get_db),
    caixa_in: AberturaCaixaSchemas,
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Abre o caixa do dia com o valor inicial informado.
    """
    try:
        stats = estatistica_service.abrir_caixa(db, usuario_id=current_user.id, valor_inicial=caixa_in.valor_inicial)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info(f"Caixa aberto por {current_user.email} com {caixa_in.valor_inicial}")
    return stats


@router.post("/sincronizar", response_model=EstatisticaDiariaSchemas)
def sincronizar(
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    try:
        return sincronizar_estatisticas(db, usuario_id=current_user.id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Erro ao sincronizar estatísticas: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erro ao sincronizar estatísticas. Tente novamente."
        )


@router.post("/reset/verificar", response_model=ResetResultadoSchemas)
async def verificar_reset(
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Executa o reset diário se já passou do horário e ele ainda não aconteceu hoje.
    """
    resetado = verificar_e_resetar(db, usuario_id=current_user.id)
    if resetado:
        await redis_client.publish_message(canal_do_quadro(current_user.id), {"evento": "reset_diario"})
    return ResetResultadoSchemas(resetado=resetado)
