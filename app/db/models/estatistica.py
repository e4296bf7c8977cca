# app/db/models/estatistica.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class EstatisticaDiaria(Base):
    """Caixa e totais do dia de um usuário. Uma linha por (usuário, data local)."""

    __tablename__ = "estatisticas_diarias"
    __table_args__ = (
        UniqueConstraint("id_usuario", "data", name="uq_estatisticas_usuario_data"),
    )

    id_usuario = Column(ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    data = Column(Date, nullable=False, index=True)

    caixa_inicial = Column(Numeric(10, 2), nullable=False, default=0)
    caixa_atual = Column(Numeric(10, 2), nullable=False, default=0)
    receita_diaria = Column(Numeric(10, 2), nullable=False, default=0)
    total_pedidos = Column(Integer, nullable=False, default=0)

    # Nulo até o primeiro reset do dia
    ultimo_reset_em = Column(DateTime(timezone=True), nullable=True)

    usuario = relationship("Usuario", back_populates="estatisticas")
