# app/services/sincronizacao_service.py
import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.core.exceptions import BalcaoError
from app.core.relogio import agora, data_local, janela_do_dia
from app.db.models.estatistica import EstatisticaDiaria
from app.db.models.pedido import ColunaKanban
from app.db.models.usuario import Usuario
from app.schemas.estatistica import ColunaSchemas, EstatisticaDiariaSchemas, QuadroSchemas
from app.schemas.pedido import PedidoSchemas
from app.services.estatistica_service import deve_resetar, inicio_da_janela, realizar_reset_diario

logger = logging.getLogger(__name__)


def sincronizar_estatisticas(
    db: Session, *, usuario_id: uuid.UUID, momento: Optional[datetime] = None
) -> EstatisticaDiaria:
    """
    Recalcula receita, total de pedidos e caixa atual a partir dos pedidos
    finalizados desde o início da janela do dia. Cria a linha do dia
    (caixa inicial zero) se ela ainda não existir.
    """
    momento = momento or agora()
    dia = data_local(momento)
    stats = crud.estatistica.get_do_dia(db, usuario_id=usuario_id, dia=dia)
    if not stats:
        stats = crud.estatistica.create_do_dia(db, usuario_id=usuario_id, dia=dia, momento=momento)

    _, fim = janela_do_dia(dia)
    finalizados = crud.pedido.get_finalizados_no_periodo(
        db, usuario_id=usuario_id, inicio=inicio_da_janela(stats, dia), fim=fim
    )
    receita = sum((Decimal(p.total) for p in finalizados), Decimal("0"))
    logger.debug("Estatísticas do usuário %s: %d pedido(s), receita %s", usuario_id, len(finalizados), receita)
    return crud.estatistica.update_valores(
        db,
        db_obj=stats,
        receita=receita,
        total_pedidos=len(finalizados),
        caixa_atual=Decimal(stats.caixa_inicial) + receita,
    )


def verificar_e_resetar(db: Session, *, usuario_id: uuid.UUID, momento: Optional[datetime] = None) -> bool:
    """Executa o reset diário quando devido. Erros são registrados e tratados como 'não resetou'."""
    momento = momento or agora()
    try:
        stats = crud.estatistica.get_do_dia(db, usuario_id=usuario_id, dia=data_local(momento))
        if not deve_resetar(stats, momento):
            return False
        realizar_reset_diario(db, usuario_id=usuario_id, momento=momento)
        return True
    except (SQLAlchemyError, BalcaoError) as e:
        db.rollback()
        logger.error("Falha na verificação do reset diário do usuário %s: %s", usuario_id, e)
        return False


def carregar_quadro(db: Session, *, usuario: Usuario, momento: Optional[datetime] = None) -> QuadroSchemas:
    momento = momento or agora()
    reset_realizado = verificar_e_resetar(db, usuario_id=usuario.id, momento=momento)

    dia = data_local(momento)
    stats = crud.estatistica.get_do_dia(db, usuario_id=usuario.id, dia=dia)
    _, fim = janela_do_dia(dia)
    ativos = crud.pedido.get_multi_by_usuario(db, usuario_id=usuario.id, apenas_ativos=True)
    finalizados = crud.pedido.get_finalizados_no_periodo(
        db, usuario_id=usuario.id, inicio=inicio_da_janela(stats, dia), fim=fim
    )

    db.refresh(usuario)
    return QuadroSchemas(
        colunas=[ColunaSchemas(id=coluna.value, titulo=coluna.titulo) for coluna in ColunaKanban],
        pedidos=[PedidoSchemas.model_validate(p) for p in ativos],
        pedidos_finalizados=[PedidoSchemas.model_validate(p) for p in finalizados],
        estatisticas=EstatisticaDiariaSchemas.model_validate(stats) if stats else None,
        proximo_numero_pedido=(usuario.ultimo_numero_pedido or 0) + 1,
        abrir_caixa=stats is None,
        reset_realizado=reset_realizado,
    )
