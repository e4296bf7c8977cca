# app/services/tarefas_periodicas.py
import asyncio
import logging
import uuid
from datetime import date, datetime
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app import crud
from app.core.config import settings
from app.core.exceptions import BalcaoError
from app.core.relogio import agora, data_local
from app.database import SessionLocal
from app.services.redis_service import canal_do_quadro, redis_client
from app.services.sincronizacao_service import sincronizar_estatisticas, verificar_e_resetar

logger = logging.getLogger(__name__)


def usuarios_com_caixa_aberto(dia: Optional[date] = None) -> List[uuid.UUID]:
    with SessionLocal() as db:
        return crud.estatistica.get_usuarios_com_estatistica(db, dia=dia or data_local())


def resetar_usuarios(momento: Optional[datetime] = None) -> List[uuid.UUID]:
    """Verifica o reset de cada usuário com caixa aberto hoje; devolve quem foi resetado."""
    resetados = []
    momento = momento or agora()
    for usuario_id in usuarios_com_caixa_aberto(data_local(momento)):
        with SessionLocal() as db:
            if verificar_e_resetar(db, usuario_id=usuario_id, momento=momento):
                resetados.append(usuario_id)
    return resetados


def sincronizar_usuarios(momento: Optional[datetime] = None) -> int:
    sincronizados = 0
    momento = momento or agora()
    for usuario_id in usuarios_com_caixa_aberto(data_local(momento)):
        with SessionLocal() as db:
            try:
                sincronizar_estatisticas(db, usuario_id=usuario_id, momento=momento)
                sincronizados += 1
            except (SQLAlchemyError, BalcaoError) as e:
                db.rollback()
                logger.error("Erro ao sincronizar estatísticas do usuário %s: %s", usuario_id, e)
    return sincronizados


class TarefasPeriodicas:
    """Verificação do reset diário e sincronização das estatísticas em segundo plano."""

    def __init__(self):
        self.is_running = False
        self.tasks: List[asyncio.Task] = []

    async def start(self):
        if not self.is_running:
            self.is_running = True
            self.tasks = [
                asyncio.create_task(self._loop(self._verificar_reset, settings.RESET_CHECK_INTERVAL_SECONDS)),
                asyncio.create_task(self._loop(self._sincronizar, settings.STATS_SYNC_INTERVAL_SECONDS)),
            ]
            logger.info("Tarefas periódicas iniciadas")

    async def stop(self):
        if self.is_running:
            self.is_running = False
            for task in self.tasks:
                task.cancel()
            for task in self.tasks:
                try:
                    await task
                except asyncio.CancelledError:
                    pass
            self.tasks = []
            logger.info("Tarefas periódicas paradas")

    async def _loop(self, tarefa: Callable, intervalo: int):
        while self.is_running:
            try:
                await tarefa()
            except (SQLAlchemyError, BalcaoError) as e:
                logger.error("Erro na tarefa periódica %s: %s", tarefa.__name__, e)
            await asyncio.sleep(intervalo)

    async def _verificar_reset(self):
        resetados = await asyncio.to_thread(resetar_usuarios)
        for usuario_id in resetados:
            await redis_client.publish_message(
                canal_do_quadro(usuario_id),
                {"evento": "reset_diario", "timestamp": agora().isoformat()},
            )

    async def _sincronizar(self):
        sincronizados = await asyncio.to_thread(sincronizar_usuarios)
        if sincronizados:
            logger.debug("Estatísticas sincronizadas para %d usuário(s)", sincronizados)


tarefas_periodicas = TarefasPeriodicas()
