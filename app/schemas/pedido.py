# app/schemas/pedido.py
import uuid
from typing import Optional
from decimal import Decimal
from datetime import datetime

from pydantic import BaseModel, field_validator

from app.db.models.pedido import ColunaKanban, MetodoPagamento # Importar Enums


class EnderecoSchemas(BaseModel):
    rua: str = ""
    numero: str = ""
    cep: str = ""
    referencia: str = ""

    def preenchido(self) -> bool:
        return any(valor.strip() for valor in (self.rua, self.numero, self.cep, self.referencia))


def _endereco_ou_none(v):
    # Endereço só existe se algum campo foi informado
    if v is None:
        return None
    if isinstance(v, dict):
        v = EnderecoSchemas(**v)
    return v if v.preenchido() else None


def _texto_obrigatorio(v):
    if v is None or not v.strip():
        raise ValueError("Por favor, preencha os campos obrigatórios")
    return v.strip()


def _total_valido(v):
    if v is None or v <= 0:
        raise ValueError("Por favor, insira um valor válido para o total")
    return v


class PedidoBaseSchemas(BaseModel):
    nome_cliente: str
    descricao: str
    total: Decimal
    metodo_pagamento: Optional[MetodoPagamento] = None
    valor_recebido: Optional[Decimal] = None
    telefone: str = ""
    numero_mesa: Optional[int] = None
    endereco: Optional[EnderecoSchemas] = None


class PedidoCreateSchemas(PedidoBaseSchemas):
    # troco, número do pedido, coluna e cor do cartão são definidos no backend

    @field_validator("nome_cliente", "descricao")
    @classmethod
    def campo_obrigatorio(cls, v):
        return _texto_obrigatorio(v)

    @field_validator("total")
    @classmethod
    def total_deve_ser_positivo(cls, v):
        return _total_valido(v)

    @field_validator("valor_recebido")
    @classmethod
    def valor_recebido_zero_e_vazio(cls, v):
        if v is not None and v <= 0:
            return None
        return v

    @field_validator("endereco", mode="before")
    @classmethod
    def endereco_vazio(cls, v):
        return _endereco_ou_none(v)


class PedidoUpdateSchemas(BaseModel):
    # Edição do cartão: nunca altera coluna nem data de conclusão
    nome_cliente: Optional[str] = None
    descricao: Optional[str] = None
    total: Optional[Decimal] = None
    metodo_pagamento: Optional[MetodoPagamento] = None
    valor_recebido: Optional[Decimal] = None
    telefone: Optional[str] = None
    numero_mesa: Optional[int] = None
    endereco: Optional[EnderecoSchemas] = None

    # Só rodam para campos enviados: null explícito também é rejeitado
    @field_validator("nome_cliente", "descricao")
    @classmethod
    def campo_obrigatorio(cls, v):
        return _texto_obrigatorio(v)

    @field_validator("total")
    @classmethod
    def total_opcional_deve_ser_positivo(cls, v):
        return _total_valido(v)

    @field_validator("telefone", mode="before")
    @classmethod
    def telefone_nulo_e_vazio(cls, v):
        return "" if v is None else v

    @field_validator("endereco", mode="before")
    @classmethod
    def endereco_vazio(cls, v):
        return _endereco_ou_none(v)


class PedidoSchemas(PedidoBaseSchemas):
    id: uuid.UUID
    numero_pedido: int
    troco: Optional[Decimal] = None
    coluna: ColunaKanban
    data_criacao: datetime
    data_conclusao: Optional[datetime] = None
    cor_cartao: Optional[str] = None

    class Config:
        from_attributes = True


class PedidoMoverSchemas(BaseModel):
    # Texto livre: a coluna é validada no serviço (coluna desconhecida -> 400)
    coluna: str


class NotificacaoSchemas(BaseModel):
    telefone: str
    mensagem: str
    link: str


class PedidoMovidoSchemas(BaseModel):
    pedido: PedidoSchemas
    notificacao: Optional[NotificacaoSchemas] = None
