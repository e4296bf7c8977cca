# app/utils/formatacao.py
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from app.db.models.pedido import MetodoPagamento

CENTAVOS = Decimal("0.01")

ROTULOS_PAGAMENTO = {
    MetodoPagamento.PIX: "PIX",
    MetodoPagamento.DINHEIRO: "Dinheiro",
    MetodoPagamento.DEBITO: "Cartão de Débito",
    MetodoPagamento.CREDITO: "Cartão de Crédito",
}

Valor = Union[Decimal, int, float, str]


def para_decimal(valor: Valor) -> Decimal:
    if isinstance(valor, Decimal):
        return valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP)
    return Decimal(str(valor)).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def limpar_digitos(texto: Optional[str]) -> str:
    return re.sub(r"\D", "", texto or "")


def formatar_moeda(valor: Valor) -> str:
    """Formata no padrão pt-BR: 1234.5 -> 'R$ 1.234,50'."""
    numero = para_decimal(valor)
    sinal = "-" if numero < 0 else ""
    inteiro, centavos = f"{abs(numero):.2f}".split(".")
    inteiro = f"{int(inteiro):,}".replace(",", ".")
    return f"{sinal}R$ {inteiro},{centavos}"


def formatar_telefone(telefone: str) -> str:
    digitos = limpar_digitos(telefone)
    if len(digitos) == 13:
        return f"+{digitos[:2]} ({digitos[2:4]}) {digitos[4:9]}-{digitos[9:]}"
    return telefone


def formatar_cep(cep: str) -> str:
    digitos = limpar_digitos(cep)
    if len(digitos) == 8:
        return f"{digitos[:5]}-{digitos[5:]}"
    return cep


def rotulo_pagamento(metodo: Optional[Union[MetodoPagamento, str]]) -> str:
    if not metodo:
        return ""
    try:
        return ROTULOS_PAGAMENTO[MetodoPagamento(metodo)]
    except ValueError:
        return ""


def formatar_duracao(segundos: float) -> str:
    """Tempo médio de preparo: '1h 5min' ou '42min'."""
    minutos = int(segundos // 60)
    horas, resto = divmod(minutos, 60)
    if horas > 0:
        return f"{horas}h {resto}min"
    return f"{resto}min"


def calcular_troco(total: Optional[Valor], recebido: Optional[Valor]) -> Optional[Decimal]:
    """
    Troco do pagamento em dinheiro.
    Só existe quando total e valor recebido são positivos; nunca é negativo.
    """
    if total is None or recebido is None:
        return None
    total_dec = para_decimal(total)
    recebido_dec = para_decimal(recebido)
    if total_dec <= 0 or recebido_dec <= 0:
        return None
    return max(recebido_dec - total_dec, Decimal("0.00"))
