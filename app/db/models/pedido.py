# app/db/models/pedido.py
import enum

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, Enum as SAEnum
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class ColunaKanban(str, enum.Enum):
    PEDIDOS = "pedidos"
    PREPARANDO = "preparando"
    PRONTO = "pronto"
    FINALIZADOS = "finalizados" # Terminal: data_conclusao preenchida

    @property
    def titulo(self) -> str:
        return TITULOS_COLUNAS[self]


TITULOS_COLUNAS = {
    ColunaKanban.PEDIDOS: "Pedidos",
    ColunaKanban.PREPARANDO: "Preparando",
    ColunaKanban.PRONTO: "Pronto para entrega",
    ColunaKanban.FINALIZADOS: "Pedidos finalizados",
}

COLUNAS_ATIVAS = [ColunaKanban.PEDIDOS, ColunaKanban.PREPARANDO, ColunaKanban.PRONTO]


class MetodoPagamento(str, enum.Enum):
    PIX = "pix"
    DINHEIRO = "dinheiro"
    DEBITO = "debito"
    CREDITO = "credito"


class Pedido(Base):
    id_usuario = Column(ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    numero_pedido = Column(Integer, nullable=False)

    nome_cliente = Column(String, nullable=False)
    descricao = Column(Text, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    metodo_pagamento = Column(SAEnum(MetodoPagamento), nullable=True)
    valor_recebido = Column(Numeric(10, 2), nullable=True)
    troco = Column(Numeric(10, 2), nullable=True)
    telefone = Column(String, nullable=False, default="")

    # Número da mesa (não é FK: as mesas podem ser reconfiguradas a qualquer momento)
    numero_mesa = Column(Integer, nullable=True)
    # {"rua", "numero", "cep", "referencia"}
    endereco = Column(JSON, nullable=True)

    coluna = Column(SAEnum(ColunaKanban), default=ColunaKanban.PEDIDOS, nullable=False, index=True)
    data_conclusao = Column(DateTime(timezone=True), nullable=True)
    cor_cartao = Column(String, nullable=True)

    usuario = relationship("Usuario", back_populates="pedidos")

    @property
    def finalizado(self) -> bool:
        return self.coluna == ColunaKanban.FINALIZADOS
