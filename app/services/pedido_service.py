# app/services/pedido_service.py
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import crud
from app.core.exceptions import (
    BalcaoError,
    RecursoNaoEncontradoError,
    RegraDeNegocioError,
    SincronizacaoError,
)
from app.core.relogio import agora
from app.db.models.pedido import ColunaKanban, Pedido
from app.db.models.usuario import Usuario
from app.schemas.pedido import (
    NotificacaoSchemas,
    PedidoCreateSchemas,
    PedidoMovidoSchemas,
    PedidoSchemas,
    PedidoUpdateSchemas,
)
from app.services import notificacao_service
from app.services.redis_service import canal_do_quadro, redis_client
from app.services.sincronizacao_service import sincronizar_estatisticas

logger = logging.getLogger(__name__)


def coluna_valida(coluna: str) -> ColunaKanban:
    try:
        return ColunaKanban(coluna)
    except ValueError:
        raise RegraDeNegocioError(f"Coluna inválida: {coluna}")


class PedidoService:
    """
    Fluxo do pedido no quadro: criação, edição e movimentação entre colunas.

    As operações no banco são síncronas (Session do SQLAlchemy); a parte
    assíncrona é a publicação dos eventos no Redis.
    """

    def _get_pedido(self, db: Session, usuario: Usuario, pedido_id: uuid.UUID) -> Pedido:
        pedido = crud.pedido.get(db, usuario_id=usuario.id, id=pedido_id)
        if not pedido:
            raise RecursoNaoEncontradoError("Pedido não encontrado")
        return pedido

    async def _publicar_evento(self, evento: str, pedido: Pedido, **extra: Any) -> None:
        mensagem: Dict[str, Any] = {
            "evento": evento,
            "pedido": PedidoSchemas.model_validate(pedido).model_dump(mode="json"),
            "timestamp": agora().isoformat(),
        }
        mensagem.update(extra)
        await redis_client.publish_message(canal_do_quadro(pedido.id_usuario), mensagem)

    async def criar_pedido(
        self, db: Session, *, usuario: Usuario, pedido_in: PedidoCreateSchemas, momento: Optional[datetime] = None
    ) -> Pedido:
        try:
            pedido = crud.pedido.create(db, obj_in=pedido_in, usuario=usuario, momento=momento)
        except SQLAlchemyError as e:
            logger.error("Erro ao salvar pedido: %s", e)
            raise SincronizacaoError("Erro ao salvar pedido. Tente novamente.") from e
        except ValueError as e:
            raise RegraDeNegocioError(str(e)) from e

        logger.info("Pedido #%s criado para o usuário %s", pedido.numero_pedido, usuario.id)
        await self._publicar_evento("pedido_criado", pedido)
        return pedido

    async def atualizar_pedido(
        self, db: Session, *, usuario: Usuario, pedido_id: uuid.UUID, pedido_in: PedidoUpdateSchemas
    ) -> Pedido:
        pedido = self._get_pedido(db, usuario, pedido_id)
        try:
            pedido = crud.pedido.update(db, db_obj=pedido, obj_in=pedido_in)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Erro ao atualizar pedido %s: %s", pedido_id, e)
            raise SincronizacaoError("Erro ao atualizar pedido. Tente novamente.") from e
        except ValueError as e:
            raise RegraDeNegocioError(str(e)) from e

        # O total de um pedido finalizado entra na receita do dia
        if pedido.finalizado:
            self._sincronizar(db, usuario.id)
        await self._publicar_evento("pedido_atualizado", pedido)
        return pedido

    async def mover_pedido(
        self,
        db: Session,
        *,
        usuario: Usuario,
        pedido_id: uuid.UUID,
        coluna: str,
        momento: Optional[datetime] = None,
    ) -> PedidoMovidoSchemas:
        destino = coluna_valida(coluna)
        pedido = self._get_pedido(db, usuario, pedido_id)

        if pedido.finalizado:
            raise RegraDeNegocioError("Pedido finalizado não pode ser movido.")
        if pedido.coluna == destino:
            return PedidoMovidoSchemas(pedido=PedidoSchemas.model_validate(pedido))

        if destino != ColunaKanban.FINALIZADOS:
            origem = pedido.coluna
            try:
                pedido = crud.pedido.atualizar_coluna(db, db_obj=pedido, coluna=destino)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Erro ao mover pedido %s: %s", pedido_id, e)
                raise SincronizacaoError("Erro ao mover pedido. Tente novamente.") from e
            await self._publicar_evento("pedido_movido", pedido, de=origem.value, para=destino.value)
            return PedidoMovidoSchemas(pedido=PedidoSchemas.model_validate(pedido))

        return await self._finalizar(db, usuario=usuario, pedido=pedido, momento=momento or agora())

    async def _finalizar(
        self, db: Session, *, usuario: Usuario, pedido: Pedido, momento: datetime
    ) -> PedidoMovidoSchemas:
        # Conclusão e liberação da mesa no mesmo commit
        try:
            crud.pedido.marcar_finalizado(db, db_obj=pedido, momento=momento)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Erro ao finalizar pedido %s: %s", pedido.id, e)
            raise SincronizacaoError("Erro ao finalizar pedido. Tente novamente.") from e
        db.refresh(pedido)
        logger.info("Pedido #%s finalizado", pedido.numero_pedido)

        self._sincronizar(db, usuario.id, momento)
        notificacao = await notificacao_service.notificar_finalizacao(pedido)
        await self._publicar_evento("pedido_finalizado", pedido)
        return PedidoMovidoSchemas(pedido=PedidoSchemas.model_validate(pedido), notificacao=notificacao)

    def _sincronizar(self, db: Session, usuario_id: uuid.UUID, momento: Optional[datetime] = None) -> None:
        # O pedido já está gravado; a próxima sincronização periódica corrige os números
        try:
            sincronizar_estatisticas(db, usuario_id=usuario_id, momento=momento)
        except (SQLAlchemyError, BalcaoError) as e:
            db.rollback()
            logger.error("Erro ao sincronizar estatísticas do usuário %s: %s", usuario_id, e)

    async def notificar_status(
        self, db: Session, *, usuario: Usuario, pedido_id: uuid.UUID
    ) -> NotificacaoSchemas:
        """Mensagem de acompanhamento conforme a coluna atual do pedido."""
        pedido = self._get_pedido(db, usuario, pedido_id)
        if not (pedido.telefone or "").strip():
            raise RegraDeNegocioError("Pedido sem telefone para notificação.")
        mensagem = notificacao_service.mensagem_de_status(pedido.coluna)
        return await notificacao_service.enviar_notificacao(pedido, mensagem)


pedido_service = PedidoService()
