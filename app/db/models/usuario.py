# app/db/models/usuario.py
from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from app.db.base_class import Base


class Usuario(Base):
    email = Column(String, nullable=False, unique=True, index=True)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Perfil
    nome = Column(String, nullable=False, default="")
    sobrenome = Column(String, nullable=False, default="")

    # Contador dos números de pedido; só cresce, mesmo após o reset diário
    ultimo_numero_pedido = Column(Integer, nullable=False, default=0)

    pedidos = relationship("Pedido", back_populates="usuario", cascade="all, delete-orphan")
    mesas = relationship("Mesa", back_populates="usuario", cascade="all, delete-orphan")
    estatisticas = relationship("EstatisticaDiaria", back_populates="usuario", cascade="all, delete-orphan")
