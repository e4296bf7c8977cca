# app/db/models/mesa.py
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
import enum

from app.db.base_class import Base


class StatusMesa(str, enum.Enum):
    LIVRE = "livre"
    OCUPADA = "ocupada" # Só via pedido com mesa; volta a livre quando o pedido é finalizado
    RESERVADA = "reservada"


class Mesa(Base):
    __table_args__ = (
        UniqueConstraint("id_usuario", "numero", name="uq_mesas_usuario_numero"),
    )

    id_usuario = Column(ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    numero = Column(Integer, nullable=False)
    capacidade = Column(Integer, nullable=False, default=4)
    status = Column(SAEnum(StatusMesa), default=StatusMesa.LIVRE, nullable=False)

    usuario = relationship("Usuario", back_populates="mesas")
