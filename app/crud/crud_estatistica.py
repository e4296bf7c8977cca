# app/crud/crud_estatistica.py
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.relogio import como_utc
from app.db.models.estatistica import EstatisticaDiaria


class CRUDEstatistica:
    def get_do_dia(self, db: Session, *, usuario_id: uuid.UUID, dia: date) -> Optional[EstatisticaDiaria]:
        return (
            db.query(EstatisticaDiaria)
            .filter(EstatisticaDiaria.id_usuario == usuario_id, EstatisticaDiaria.data == dia)
            .first()
        )

    def get_usuarios_com_estatistica(self, db: Session, *, dia: date) -> List[uuid.UUID]:
        linhas = db.query(EstatisticaDiaria.id_usuario).filter(EstatisticaDiaria.data == dia).all()
        return [linha[0] for linha in linhas]

    def create_do_dia(
        self,
        db: Session,
        *,
        usuario_id: uuid.UUID,
        dia: date,
        caixa_inicial: Decimal = Decimal("0"),
        momento: Optional[datetime] = None,
    ) -> EstatisticaDiaria:
        if self.get_do_dia(db, usuario_id=usuario_id, dia=dia):
            raise ValueError("O caixa de hoje já foi aberto.")

        db_obj = EstatisticaDiaria(
            id_usuario=usuario_id,
            data=dia,
            caixa_inicial=caixa_inicial,
            caixa_atual=caixa_inicial,
            receita_diaria=Decimal("0"),
            total_pedidos=0,
        )
        if momento is not None:
            db_obj.data_criacao = como_utc(momento)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_valores(
        self,
        db: Session,
        *,
        db_obj: EstatisticaDiaria,
        receita: Decimal,
        total_pedidos: int,
        caixa_atual: Decimal,
    ) -> EstatisticaDiaria:
        db_obj.receita_diaria = receita
        db_obj.total_pedidos = total_pedidos
        db_obj.caixa_atual = caixa_atual
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def zerar(self, db: Session, *, db_obj: EstatisticaDiaria, momento: datetime) -> EstatisticaDiaria:
        """Zera os contadores do dia. O commit fica a cargo de quem chama."""
        db_obj.receita_diaria = Decimal("0")
        db_obj.total_pedidos = 0
        db_obj.caixa_atual = Decimal("0")
        db_obj.ultimo_reset_em = como_utc(momento)
        db.add(db_obj)
        return db_obj


estatistica = CRUDEstatistica()
