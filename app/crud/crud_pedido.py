# app/crud/crud_pedido.py
import random
import uuid
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from app.core.relogio import agora, como_utc, janela_do_dia
from app.crud.crud_mesa import mesa as crud_mesa
from app.crud.crud_usuario import usuario as crud_usuario
from app.db.models.pedido import Pedido, ColunaKanban, COLUNAS_ATIVAS
from app.db.models.usuario import Usuario
from app.schemas.pedido import PedidoCreateSchemas, PedidoUpdateSchemas
from app.utils.formatacao import calcular_troco

CORES_CARTAO = [
    "bg-gradient-to-br from-pink-100 to-pink-200 border-pink-300",
    "bg-gradient-to-br from-purple-100 to-purple-200 border-purple-300",
    "bg-gradient-to-br from-indigo-100 to-indigo-200 border-indigo-300",
    "bg-gradient-to-br from-cyan-100 to-cyan-200 border-cyan-300",
    "bg-gradient-to-br from-teal-100 to-teal-200 border-teal-300",
    "bg-gradient-to-br from-emerald-100 to-emerald-200 border-emerald-300",
    "bg-gradient-to-br from-yellow-100 to-yellow-200 border-yellow-300",
    "bg-gradient-to-br from-orange-100 to-orange-200 border-orange-300",
]


class CRUDPedido:
    def get(self, db: Session, *, usuario_id: uuid.UUID, id: uuid.UUID) -> Optional[Pedido]:
        return db.query(Pedido).filter(Pedido.id == id, Pedido.id_usuario == usuario_id).first()

    def get_multi_by_usuario(
        self,
        db: Session,
        *,
        usuario_id: uuid.UUID,
        coluna: Optional[ColunaKanban] = None,
        apenas_ativos: bool = False,
        skip: int = 0,
        limit: int = 500,
    ) -> List[Pedido]:
        query = db.query(Pedido).filter(Pedido.id_usuario == usuario_id)
        if coluna:
            query = query.filter(Pedido.coluna == coluna)
        elif apenas_ativos:
            query = query.filter(Pedido.coluna.in_(COLUNAS_ATIVAS))
        return query.order_by(Pedido.data_criacao.desc()).offset(skip).limit(limit).all()

    def get_finalizados_no_periodo(
        self, db: Session, *, usuario_id: uuid.UUID, inicio: datetime, fim: datetime
    ) -> List[Pedido]:
        return (
            db.query(Pedido)
            .filter(
                Pedido.id_usuario == usuario_id,
                Pedido.coluna == ColunaKanban.FINALIZADOS,
                Pedido.data_conclusao >= inicio,
                Pedido.data_conclusao < fim,
            )
            .order_by(Pedido.data_conclusao.desc())
            .all()
        )

    def create(
        self, db: Session, *, obj_in: PedidoCreateSchemas, usuario: Usuario, momento: Optional[datetime] = None
    ) -> Pedido:
        try:
            # Selecionar a mesa no pedido a marca como ocupada
            if obj_in.numero_mesa:
                crud_mesa.ocupar(db, usuario_id=usuario.id, numero=obj_in.numero_mesa)

            db_pedido = Pedido(
                id_usuario=usuario.id,
                numero_pedido=crud_usuario.proximo_numero_pedido(db, usuario=usuario),
                nome_cliente=obj_in.nome_cliente,
                descricao=obj_in.descricao,
                total=obj_in.total,
                metodo_pagamento=obj_in.metodo_pagamento,
                valor_recebido=obj_in.valor_recebido,
                troco=calcular_troco(obj_in.total, obj_in.valor_recebido),
                telefone=obj_in.telefone or "",
                numero_mesa=obj_in.numero_mesa,
                endereco=obj_in.endereco.model_dump() if obj_in.endereco else None,
                coluna=ColunaKanban.PEDIDOS,
                cor_cartao=random.choice(CORES_CARTAO),
                data_criacao=como_utc(momento) if momento else agora(),
            )
            db.add(db_pedido)
            db.commit()
        except Exception:
            db.rollback() # Desfaz a ocupação da mesa e o contador se algo falhar
            raise
        db.refresh(db_pedido)
        return db_pedido

    def update(
        self, db: Session, *, db_obj: Pedido, obj_in: Union[PedidoUpdateSchemas, Dict[str, Any]]
    ) -> Pedido:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        # Campos de ciclo de vida não são editáveis por aqui
        for campo in ("coluna", "data_conclusao", "numero_pedido", "id_usuario"):
            update_data.pop(campo, None)

        if "endereco" in update_data and update_data["endereco"] is not None:
            endereco = update_data["endereco"]
            update_data["endereco"] = endereco if isinstance(endereco, dict) else endereco.model_dump()

        try:
            nova_mesa = update_data.get("numero_mesa", db_obj.numero_mesa)
            # Trocar a mesa de um pedido ativo ocupa a nova e libera a antiga
            if nova_mesa != db_obj.numero_mesa and not db_obj.finalizado:
                if nova_mesa:
                    crud_mesa.ocupar(db, usuario_id=db_obj.id_usuario, numero=nova_mesa)
                if db_obj.numero_mesa:
                    crud_mesa.liberar(db, usuario_id=db_obj.id_usuario, numero=db_obj.numero_mesa)

            for field in update_data:
                if hasattr(db_obj, field):
                    setattr(db_obj, field, update_data[field])

            if "total" in update_data or "valor_recebido" in update_data:
                db_obj.troco = calcular_troco(db_obj.total, db_obj.valor_recebido)

            db.add(db_obj)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_obj)
        return db_obj

    def atualizar_coluna(self, db: Session, *, db_obj: Pedido, coluna: ColunaKanban) -> Pedido:
        db_obj.coluna = coluna
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def marcar_finalizado(self, db: Session, *, db_obj: Pedido, momento: datetime) -> Pedido:
        """Carimba a conclusão e libera a mesa. O commit fica a cargo de quem chama."""
        db_obj.coluna = ColunaKanban.FINALIZADOS
        db_obj.data_conclusao = como_utc(momento)
        if db_obj.numero_mesa:
            crud_mesa.liberar(db, usuario_id=db_obj.id_usuario, numero=db_obj.numero_mesa)
        db.add(db_obj)
        return db_obj

    def remove_do_dia(
        self,
        db: Session,
        *,
        usuario_id: uuid.UUID,
        dia: date,
        colunas: Optional[Iterable[ColunaKanban]] = None,
    ) -> int:
        """
        Remove os pedidos criados no dia local informado, liberando as mesas
        dos pedidos ainda ativos. O commit fica a cargo de quem chama.
        """
        inicio, fim = janela_do_dia(dia)
        query = db.query(Pedido).filter(
            Pedido.id_usuario == usuario_id,
            Pedido.data_criacao >= inicio,
            Pedido.data_criacao < fim,
        )
        if colunas is not None:
            query = query.filter(Pedido.coluna.in_(list(colunas)))

        for db_pedido in query.filter(Pedido.coluna != ColunaKanban.FINALIZADOS, Pedido.numero_mesa.isnot(None)):
            crud_mesa.liberar(db, usuario_id=usuario_id, numero=db_pedido.numero_mesa)
        return query.delete(synchronize_session=False)


pedido = CRUDPedido()
