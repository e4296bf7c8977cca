import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from app.db.models.estatistica import EstatisticaDiaria
from app.db.models.pedido import ColunaKanban, MetodoPagamento, Pedido
from app.services.relatorio_service import calcular_metricas, linhas_da_nota, tempo_medio_segundos
from conftest import API

INICIO = datetime(2026, 3, 10, 14, 0, tzinfo=timezone.utc)


def _pedido(numero, total, coluna=ColunaKanban.FINALIZADOS, minutos=None, **extra):
    extra.setdefault("telefone", "")
    pedido = Pedido(
        id=uuid.uuid4(),
        numero_pedido=numero,
        nome_cliente="Bia",
        descricao="Açaí 500ml",
        total=Decimal(total),
        coluna=coluna,
        data_criacao=INICIO,
        **extra,
    )
    if minutos is not None:
        pedido.data_conclusao = INICIO + timedelta(minutes=minutos)
    return pedido


def test_tempo_medio():
    pedidos = [_pedido(1, "10", minutos=20), _pedido(2, "10", minutos=40)]
    assert tempo_medio_segundos(pedidos) == 30 * 60
    assert tempo_medio_segundos([]) == 0.0


def test_calcular_metricas():
    finalizados = [_pedido(1, "30.00", minutos=20), _pedido(2, "20.00", minutos=100)]
    ativos = [_pedido(3, "15.00", coluna=ColunaKanban.PREPARANDO)]
    stats = EstatisticaDiaria(caixa_inicial=Decimal("50.00"))

    relatorio = calcular_metricas(finalizados, ativos, stats, INICIO.date())
    assert relatorio.receita_diaria == Decimal("50.00")
    assert relatorio.receita_acumulada == relatorio.receita_diaria
    assert relatorio.total_pedidos == 2
    assert relatorio.ticket_medio == Decimal("25.00")
    assert relatorio.caixa_atual == Decimal("100.00")
    assert relatorio.tempo_medio_formatado == "1h 0min"
    assert relatorio.pedidos_por_coluna == {"pedidos": 0, "preparando": 1, "pronto": 0, "finalizados": 2}
    assert relatorio.receita_por_coluna["preparando"] == Decimal("15.00")


def test_metricas_sem_pedidos():
    relatorio = calcular_metricas([], [], None, INICIO.date())
    assert relatorio.ticket_medio == Decimal("0.00")
    assert relatorio.caixa_atual == Decimal("0")
    assert relatorio.tempo_medio_formatado == "0min"


def test_linhas_da_nota():
    pedido = _pedido(
        7,
        "45.00",
        minutos=10,
        telefone="5511988887777",
        metodo_pagamento=MetodoPagamento.DINHEIRO,
        valor_recebido=Decimal("50.00"),
        troco=Decimal("5.00"),
        endereco={"rua": "Rua A", "numero": "10", "cep": "01310100", "referencia": "Portão azul"},
    )
    linhas = linhas_da_nota(pedido)
    assert linhas[0] == "BALCÃO DIGITAL"
    assert "Número do Pedido: #7" in linhas
    # 14:00 UTC é 11:00 em São Paulo
    assert "Horário: 11:00" in linhas
    assert "Telefone: +55 (11) 98888-7777" in linhas
    assert "Pagamento: Dinheiro" in linhas
    assert "CEP: 01310-100" in linhas
    assert "VALOR TOTAL: R$ 45,00" in linhas
    assert "TROCO: R$ 5,00" in linhas


def test_relatorio_diario_api(client, auth_headers):
    client.post(f"{API}/estatisticas/caixa", json={"valor_inicial": "10.00"}, headers=auth_headers)
    pedido = client.post(
        f"{API}/pedidos/", json={"nome_cliente": "Bia", "descricao": "Açaí", "total": "18.00"}, headers=auth_headers
    ).json()
    client.put(f"{API}/pedidos/{pedido['id']}/mover", json={"coluna": "finalizados"}, headers=auth_headers)

    relatorio = client.get(f"{API}/relatorios/diario", headers=auth_headers).json()
    assert Decimal(relatorio["receita_diaria"]) == Decimal("18.00")
    assert Decimal(relatorio["caixa_atual"]) == Decimal("28.00")
    assert relatorio["total_pedidos"] == 1

    resposta = client.get(f"{API}/relatorios/diario.pdf", headers=auth_headers)
    assert resposta.status_code == 200
    assert resposta.headers["content-type"] == "application/pdf"
    assert resposta.content.startswith(b"%PDF")


def test_nota_do_pedido_api(client, auth_headers):
    pedido = client.post(
        f"{API}/pedidos/", json={"nome_cliente": "Bia", "descricao": "Açaí", "total": "18.00"}, headers=auth_headers
    ).json()

    nota = client.get(f"{API}/pedidos/{pedido['id']}/nota", headers=auth_headers).json()
    assert nota["numero_pedido"] == 1
    assert "Nome: Bia" in nota["linhas"]

    resposta = client.get(f"{API}/pedidos/{pedido['id']}/nota.pdf", headers=auth_headers)
    assert resposta.status_code == 200
    assert resposta.content.startswith(b"%PDF")
