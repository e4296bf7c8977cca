# app/crud/crud_mesa.py
import uuid
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.db.models.mesa import Mesa, StatusMesa

MAXIMO_MESAS = 100
CAPACIDADE_PADRAO = 4


def transicao_manual_permitida(atual: StatusMesa, novo: StatusMesa) -> bool:
    """
    Alteração feita pelo operador: só alterna entre livre e reservada.
    Ocupar/liberar acontece apenas pelo ciclo do pedido.
    """
    if novo == StatusMesa.OCUPADA or atual == StatusMesa.OCUPADA:
        return False
    return True


class CRUDMesa:
    def get_by_numero(self, db: Session, *, usuario_id: uuid.UUID, numero: int) -> Optional[Mesa]:
        return db.query(Mesa).filter(Mesa.id_usuario == usuario_id, Mesa.numero == numero).first()

    def get_multi(
        self, db: Session, *, usuario_id: uuid.UUID, status: Optional[StatusMesa] = None
    ) -> List[Mesa]:
        query = db.query(Mesa).filter(Mesa.id_usuario == usuario_id)
        if status:
            query = query.filter(Mesa.status == status)
        return query.order_by(Mesa.numero).all()

    def contar_por_status(self, mesas: List[Mesa]) -> Dict[StatusMesa, int]:
        contagem = {status: 0 for status in StatusMesa}
        for mesa in mesas:
            contagem[mesa.status] += 1
        return contagem

    def configurar(self, db: Session, *, usuario_id: uuid.UUID, quantidade: int) -> List[Mesa]:
        """Substitui todas as mesas do usuário pelas mesas 1..quantidade, livres."""
        if quantidade <= 0 or quantidade > MAXIMO_MESAS:
            raise ValueError(f"Por favor, insira um número válido entre 1 e {MAXIMO_MESAS}")

        db.query(Mesa).filter(Mesa.id_usuario == usuario_id).delete(synchronize_session=False)
        # Remove antes de inserir: (usuário, número) é único
        db.flush()
        for numero in range(1, quantidade + 1):
            db.add(Mesa(
                id_usuario=usuario_id,
                numero=numero,
                capacidade=CAPACIDADE_PADRAO,
                status=StatusMesa.LIVRE,
            ))
        db.commit()
        return self.get_multi(db, usuario_id=usuario_id)

    def remove_all(self, db: Session, *, usuario_id: uuid.UUID) -> int:
        removidas = db.query(Mesa).filter(Mesa.id_usuario == usuario_id).delete(synchronize_session=False)
        db.commit()
        return removidas

    def alterar_status(self, db: Session, *, db_obj: Mesa, status: StatusMesa) -> Mesa:
        if not transicao_manual_permitida(db_obj.status, status):
            if db_obj.status == StatusMesa.OCUPADA:
                raise ValueError(f"Mesa {db_obj.numero} está ocupada e só é liberada ao finalizar o pedido.")
            raise ValueError("Uma mesa só fica ocupada ao receber um pedido.")
        db_obj.status = status
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # Funções chamadas pelo fluxo do pedido; o commit fica a cargo de quem chama
    def ocupar(self, db: Session, *, usuario_id: uuid.UUID, numero: int) -> Mesa:
        mesa = self.get_by_numero(db, usuario_id=usuario_id, numero=numero)
        if not mesa:
            raise ValueError(f"Mesa {numero} não encontrada.")
        if mesa.status == StatusMesa.OCUPADA:
            raise ValueError(f"Mesa {numero} já está ocupada.")
        mesa.status = StatusMesa.OCUPADA
        db.add(mesa)
        return mesa

    def liberar(self, db: Session, *, usuario_id: uuid.UUID, numero: int) -> Optional[Mesa]:
        mesa = self.get_by_numero(db, usuario_id=usuario_id, numero=numero)
        if mesa and mesa.status == StatusMesa.OCUPADA:
            mesa.status = StatusMesa.LIVRE
            db.add(mesa)
        return mesa


mesa = CRUDMesa()
