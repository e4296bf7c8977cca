# app/schemas/relatorio.py
from typing import Dict, List
from decimal import Decimal
from datetime import date

from pydantic import BaseModel

from app.schemas.pedido import PedidoSchemas


class RelatorioDiarioSchemas(BaseModel):
    data: date
    receita_diaria: Decimal
    # Igual à receita do dia: a receita histórica não é acumulada em lugar nenhum
    receita_acumulada: Decimal
    total_pedidos: int
    ticket_medio: Decimal
    caixa_inicial: Decimal
    caixa_atual: Decimal
    tempo_medio_segundos: float
    tempo_medio_formatado: str
    pedidos_por_coluna: Dict[str, int]
    receita_por_coluna: Dict[str, Decimal]
    pedidos: List[PedidoSchemas]


class NotaPedidoSchemas(BaseModel):
    numero_pedido: int
    linhas: List[str]
