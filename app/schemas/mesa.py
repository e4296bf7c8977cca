# app/schemas/mesa.py
from typing import List
import uuid
from pydantic import BaseModel

from app.db.models.mesa import StatusMesa # Importar o Enum


class MesaBaseSchemas(BaseModel):
    numero: int
    capacidade: int = 4
    status: StatusMesa = StatusMesa.LIVRE


class MesaSchemas(MesaBaseSchemas):
    id: uuid.UUID

    class Config:
        from_attributes = True


class MesaConfigurarSchemas(BaseModel):
    # Recria as mesas 1..quantidade
    quantidade: int


class MesaStatusUpdateSchemas(BaseModel):
    status: StatusMesa


class MesasResumoSchemas(BaseModel):
    mesas: List[MesaSchemas] = []
    total: int = 0
    livres: int = 0
    ocupadas: int = 0
    reservadas: int = 0
