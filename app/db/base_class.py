import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import as_declarative, declared_attr

from app.core.relogio import agora


@as_declarative()
class Base:
    """
    Base class which provides automated table name
    and surrogate primary key column.
    """

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s" # Ex: Usuario -> usuarios

    # UUID como chave padrão; o tipo genérico funciona no PostgreSQL e no SQLite
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    data_criacao = Column(DateTime(timezone=True), default=agora, nullable=False)
    data_atualizacao = Column(DateTime(timezone=True), onupdate=agora)
