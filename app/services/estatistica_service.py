# app/services/estatistica_service.py
"""
Caixa do dia e reset diário.

O reset acontece uma vez por dia, a partir de settings.DAILY_RESET_HOUR (hora
local). Ele remove os pedidos ativos criados hoje e zera os contadores; os
pedidos finalizados continuam gravados para os relatórios.
"""
import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.core.config import settings
from app.core.exceptions import RecursoNaoEncontradoError, RegraDeNegocioError, SincronizacaoError
from app.core.relogio import agora, como_utc, data_local, horario_de_reset, inicio_do_dia, para_local
from app.db.models.estatistica import EstatisticaDiaria
from app.db.models.pedido import COLUNAS_ATIVAS

logger = logging.getLogger(__name__)


def inicio_da_janela(stats: Optional[EstatisticaDiaria], dia: date) -> datetime:
    """Receita e contagem valem a partir do maior entre meia-noite local e o último reset."""
    inicio = inicio_do_dia(dia)
    if stats is not None and stats.ultimo_reset_em is not None:
        return max(inicio, como_utc(stats.ultimo_reset_em))
    return inicio


def deve_resetar(stats: Optional[EstatisticaDiaria], momento: Optional[datetime] = None) -> bool:
    momento = momento or agora()
    if stats is None:
        return False
    local = para_local(momento)
    if local.hour < settings.DAILY_RESET_HOUR:
        return False
    referencia = stats.ultimo_reset_em or stats.data_criacao
    return como_utc(referencia) < horario_de_reset(local.date())


def realizar_reset_diario(db: Session, *, usuario_id: uuid.UUID, momento: Optional[datetime] = None) -> int:
    """Executa o reset do dia e devolve quantos pedidos ativos foram removidos."""
    momento = momento or agora()
    dia = data_local(momento)
    stats = crud.estatistica.get_do_dia(db, usuario_id=usuario_id, dia=dia)
    if not stats:
        raise RecursoNaoEncontradoError("Estatísticas do dia não encontradas.")
    try:
        removidos = crud.pedido.remove_do_dia(db, usuario_id=usuario_id, dia=dia, colunas=COLUNAS_ATIVAS)
        crud.estatistica.zerar(db, db_obj=stats, momento=momento)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Erro ao executar reset diário do usuário %s: %s", usuario_id, e)
        raise SincronizacaoError("Erro ao executar o reset diário.") from e
    logger.info("Reset diário executado para o usuário %s: %d pedido(s) ativo(s) removido(s)", usuario_id, removidos)
    return removidos


def abrir_caixa(
    db: Session, *, usuario_id: uuid.UUID, valor_inicial: Decimal, momento: Optional[datetime] = None
) -> EstatisticaDiaria:
    if valor_inicial < 0:
        raise RegraDeNegocioError("Por favor, insira um valor válido")
    dia = data_local(momento)
    try:
        return crud.estatistica.create_do_dia(
            db, usuario_id=usuario_id, dia=dia, caixa_inicial=valor_inicial, momento=momento
        )
    except ValueError as e:
        raise RegraDeNegocioError(str(e)) from e
