# app/schemas/estatistica.py
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_validator

from app.schemas.pedido import PedidoSchemas


class EstatisticaDiariaSchemas(BaseModel):
    id: uuid.UUID
    data: date
    caixa_inicial: Decimal
    caixa_atual: Decimal
    receita_diaria: Decimal
    total_pedidos: int
    ultimo_reset_em: Optional[datetime] = None
    data_criacao: datetime
    data_atualizacao: Optional[datetime] = None

    class Config:
        from_attributes = True


class AberturaCaixaSchemas(BaseModel):
    valor_inicial: Decimal

    @field_validator("valor_inicial")
    @classmethod
    def valor_nao_negativo(cls, v):
        if v < 0:
            raise ValueError("Por favor, insira um valor válido")
        return v


class ColunaSchemas(BaseModel):
    id: str
    titulo: str


class QuadroSchemas(BaseModel):
    """Estado do quadro ao abrir a aplicação."""
    colunas: List[ColunaSchemas]
    pedidos: List[PedidoSchemas]
    pedidos_finalizados: List[PedidoSchemas]
    estatisticas: Optional[EstatisticaDiariaSchemas] = None
    proximo_numero_pedido: int
    # Sem estatísticas do dia: o cliente deve pedir o valor inicial do caixa
    abrir_caixa: bool
    reset_realizado: bool = False


class ResetResultadoSchemas(BaseModel):
    resetado: bool
