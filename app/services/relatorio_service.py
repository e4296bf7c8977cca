# app/services/relatorio_service.py
import io
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from sqlalchemy.orm import Session

from app import crud
from app.core.relogio import agora, como_utc, data_local, janela_do_dia, para_local
from app.db.models.estatistica import EstatisticaDiaria
from app.db.models.pedido import ColunaKanban, Pedido
from app.db.models.usuario import Usuario
from app.schemas.pedido import PedidoSchemas
from app.schemas.relatorio import RelatorioDiarioSchemas
from app.services.estatistica_service import inicio_da_janela
from app.utils.formatacao import (
    CENTAVOS,
    formatar_cep,
    formatar_duracao,
    formatar_moeda,
    formatar_telefone,
    rotulo_pagamento,
)

logger = logging.getLogger(__name__)

TITULO_SISTEMA = "BALCÃO DIGITAL"
SUBTITULO_SISTEMA = "Sistema de Gestão Gastronômica"


def tempo_medio_segundos(pedidos: List[Pedido]) -> float:
    duracoes = [
        (como_utc(p.data_conclusao) - como_utc(p.data_criacao)).total_seconds()
        for p in pedidos
        if p.data_conclusao and p.data_criacao
    ]
    if not duracoes:
        return 0.0
    return sum(duracoes) / len(duracoes)


def calcular_metricas(
    finalizados: List[Pedido],
    ativos: List[Pedido],
    stats: Optional[EstatisticaDiaria],
    dia,
) -> RelatorioDiarioSchemas:
    receita = sum((Decimal(p.total) for p in finalizados), Decimal("0"))
    total = len(finalizados)
    ticket_medio = (receita / total).quantize(CENTAVOS) if total else Decimal("0.00")
    caixa_inicial = Decimal(stats.caixa_inicial) if stats else Decimal("0")

    pedidos_por_coluna: Dict[str, int] = {coluna.value: 0 for coluna in ColunaKanban}
    receita_por_coluna: Dict[str, Decimal] = {coluna.value: Decimal("0") for coluna in ColunaKanban}
    for p in list(ativos) + list(finalizados):
        pedidos_por_coluna[p.coluna.value] += 1
        receita_por_coluna[p.coluna.value] += Decimal(p.total)

    segundos = tempo_medio_segundos(finalizados)
    return RelatorioDiarioSchemas(
        data=dia,
        receita_diaria=receita,
        receita_acumulada=receita,
        total_pedidos=total,
        ticket_medio=ticket_medio,
        caixa_inicial=caixa_inicial,
        caixa_atual=caixa_inicial + receita,
        tempo_medio_segundos=segundos,
        tempo_medio_formatado=formatar_duracao(segundos),
        pedidos_por_coluna=pedidos_por_coluna,
        receita_por_coluna=receita_por_coluna,
        pedidos=[PedidoSchemas.model_validate(p) for p in finalizados],
    )


def relatorio_diario(db: Session, *, usuario: Usuario, momento: Optional[datetime] = None) -> RelatorioDiarioSchemas:
    momento = momento or agora()
    dia = data_local(momento)
    stats = crud.estatistica.get_do_dia(db, usuario_id=usuario.id, dia=dia)
    _, fim = janela_do_dia(dia)
    finalizados = crud.pedido.get_finalizados_no_periodo(
        db, usuario_id=usuario.id, inicio=inicio_da_janela(stats, dia), fim=fim
    )
    ativos = crud.pedido.get_multi_by_usuario(db, usuario_id=usuario.id, apenas_ativos=True)
    return calcular_metricas(finalizados, ativos, stats, dia)


def linhas_da_nota(pedido: Pedido) -> List[str]:
    """Conteúdo da nota de pedido, uma linha por item."""
    criado = para_local(pedido.data_criacao)
    linhas = [
        TITULO_SISTEMA,
        SUBTITULO_SISTEMA,
        "NOTA DE PEDIDO",
        f"Número do Pedido: #{pedido.numero_pedido}",
        f"Data: {criado.strftime('%d/%m/%Y')}",
        f"Horário: {criado.strftime('%H:%M')}",
        "DADOS DO CLIENTE",
        f"Nome: {pedido.nome_cliente}",
    ]
    if pedido.telefone:
        linhas.append(f"Telefone: {formatar_telefone(pedido.telefone)}")
    if pedido.metodo_pagamento:
        linhas.append(f"Pagamento: {rotulo_pagamento(pedido.metodo_pagamento)}")
    if pedido.numero_mesa:
        linhas.append(f"Mesa: Mesa {pedido.numero_mesa}")

    endereco = pedido.endereco or {}
    if any(str(v).strip() for v in endereco.values() if v is not None):
        linhas.append("ENDEREÇO DE ENTREGA")
        if endereco.get("cep"):
            linhas.append(f"CEP: {formatar_cep(endereco['cep'])}")
        if endereco.get("rua"):
            linhas.append(f"Rua/Avenida: {endereco['rua']}")
        if endereco.get("numero"):
            linhas.append(f"Número: {endereco['numero']}")
        if endereco.get("referencia"):
            linhas.append(f"Referência: {endereco['referencia']}")

    linhas.append("DETALHES DO PEDIDO")
    linhas.extend(pedido.descricao.splitlines() or [pedido.descricao])
    linhas.append("VALORES")
    linhas.append(f"VALOR TOTAL: {formatar_moeda(pedido.total)}")
    if pedido.valor_recebido is not None:
        linhas.append(f"VALOR RECEBIDO: {formatar_moeda(pedido.valor_recebido)}")
    if pedido.troco is not None:
        linhas.append(f"TROCO: {formatar_moeda(pedido.troco)}")
    linhas.append("Esta é uma nota de pedido gerada automaticamente pelo sistema.")
    return linhas


def _desenhar_linhas(linhas: List[str], titulo_pdf: str) -> bytes:
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(titulo_pdf)
    width, height = A4

    y = height - 50
    for indice, linha in enumerate(linhas):
        if indice == 0:
            c.setFont("Helvetica-Bold", 14)
            c.drawCentredString(width / 2, y, linha)
        elif linha.isupper():
            c.setFont("Helvetica-Bold", 11)
            c.drawString(40, y, linha)
        else:
            c.setFont("Helvetica", 10)
            c.drawString(40, y, linha[:100])
        y -= 16
        if y < 60:
            c.showPage()
            y = height - 50

    c.setFont("Helvetica", 8)
    c.drawCentredString(width / 2, 30, f"Gerado em: {para_local(agora()).strftime('%d/%m/%Y %H:%M')}")
    c.showPage()
    c.save()
    return buffer.getvalue()


def gerar_pdf_nota(pedido: Pedido) -> bytes:
    return _desenhar_linhas(linhas_da_nota(pedido), f"Nota do pedido #{pedido.numero_pedido}")


def linhas_do_relatorio(relatorio: RelatorioDiarioSchemas) -> List[str]:
    linhas = [
        "Relatório Diário - Balcão Digital",
        f"Data: {relatorio.data.strftime('%d/%m/%Y')}",
        "RESUMO GERAL",
        f"Receita do dia: {formatar_moeda(relatorio.receita_diaria)}",
        f"Pedidos finalizados: {relatorio.total_pedidos}",
        f"Valor médio por pedido: {formatar_moeda(relatorio.ticket_medio)}",
        f"Tempo médio de preparo: {relatorio.tempo_medio_formatado}",
        "CONTROLE DE CAIXA",
        f"Valor inicial do caixa: {formatar_moeda(relatorio.caixa_inicial)}",
        f"Vendas do dia: {formatar_moeda(relatorio.receita_diaria)}",
        f"Total atual em caixa: {formatar_moeda(relatorio.caixa_atual)}",
    ]
    if not relatorio.pedidos:
        linhas.append("Nenhum pedido finalizado no período")
        return linhas

    linhas.append("PEDIDOS FINALIZADOS")
    for p in relatorio.pedidos:
        mesa = str(p.numero_mesa) if p.numero_mesa else "-"
        tempo = "-"
        if p.data_conclusao:
            tempo = formatar_duracao((como_utc(p.data_conclusao) - como_utc(p.data_criacao)).total_seconds())
        linhas.append(
            f"#{p.numero_pedido}  {p.nome_cliente[:20]}  Mesa {mesa}  {formatar_moeda(p.total)}  {tempo}"
        )
    linhas.append(f"TOTAL GERAL: {formatar_moeda(relatorio.receita_diaria)}")
    return linhas


def gerar_pdf_relatorio(relatorio: RelatorioDiarioSchemas) -> bytes:
    return _desenhar_linhas(linhas_do_relatorio(relatorio), f"Relatório diário {relatorio.data.isoformat()}")
