from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from app import crud
from app.core.exceptions import RegraDeNegocioError
from app.db.models.estatistica import EstatisticaDiaria
from app.db.models.mesa import StatusMesa
from app.db.models.pedido import ColunaKanban, Pedido
from app.schemas.pedido import PedidoCreateSchemas
from app.services.estatistica_service import abrir_caixa, deve_resetar
from app.services.sincronizacao_service import carregar_quadro, sincronizar_estatisticas, verificar_e_resetar

SP = ZoneInfo("America/Sao_Paulo")


def as_(hora, minuto=0):
    return datetime(2026, 3, 10, hora, minuto, tzinfo=SP)


def _stats(criado_em, ultimo_reset=None):
    return EstatisticaDiaria(data=criado_em.date(), data_criacao=criado_em, ultimo_reset_em=ultimo_reset)


def _criar_pedido(db, usuario, momento, total="25.00", **extra):
    pedido_in = PedidoCreateSchemas(nome_cliente="Ana", descricao="X-Burguer", total=Decimal(total), **extra)
    return crud.pedido.create(db, obj_in=pedido_in, usuario=usuario, momento=momento)


def _finalizar(db, pedido, momento):
    crud.pedido.marcar_finalizado(db, db_obj=pedido, momento=momento)
    db.commit()


def test_sem_estatisticas_nao_reseta():
    assert deve_resetar(None, as_(18)) is False


def test_antes_do_horario_nao_reseta():
    assert deve_resetar(_stats(as_(9)), as_(16, 59)) is False


def test_a_partir_das_17h_reseta():
    assert deve_resetar(_stats(as_(9)), as_(17, 0)) is True


def test_reset_ja_feito_hoje_nao_repete():
    assert deve_resetar(_stats(as_(9), ultimo_reset=as_(17, 5)), as_(18)) is False


def test_reset_de_ontem_nao_conta():
    ontem = datetime(2026, 3, 9, 17, 30, tzinfo=SP)
    assert deve_resetar(_stats(as_(9), ultimo_reset=ontem), as_(17, 30)) is True


def test_caixa_aberto_depois_das_17h_nao_reseta():
    assert deve_resetar(_stats(as_(18)), as_(19)) is False


def test_abrir_caixa_duas_vezes(db, usuario):
    abrir_caixa(db, usuario_id=usuario.id, valor_inicial=Decimal("100"), momento=as_(10))
    with pytest.raises(RegraDeNegocioError, match="já foi aberto"):
        abrir_caixa(db, usuario_id=usuario.id, valor_inicial=Decimal("50"), momento=as_(11))


def test_ciclo_do_dia_com_reset(db, usuario):
    abrir_caixa(db, usuario_id=usuario.id, valor_inicial=Decimal("100"), momento=as_(10))
    a = _criar_pedido(db, usuario, as_(11), total="40.00")
    b = _criar_pedido(db, usuario, as_(12))
    c = _criar_pedido(db, usuario, as_(13))
    crud.pedido.atualizar_coluna(db, db_obj=c, coluna=ColunaKanban.PRONTO)
    _finalizar(db, a, as_(12, 30))

    stats = sincronizar_estatisticas(db, usuario_id=usuario.id, momento=as_(13))
    assert stats.receita_diaria == Decimal("40.00")
    assert stats.total_pedidos == 1
    assert stats.caixa_atual == Decimal("140.00")

    assert verificar_e_resetar(db, usuario_id=usuario.id, momento=as_(16)) is False
    assert verificar_e_resetar(db, usuario_id=usuario.id, momento=as_(17, 30)) is True

    restantes = db.query(Pedido).filter(Pedido.id_usuario == usuario.id).all()
    assert [p.numero_pedido for p in restantes] == [a.numero_pedido]
    stats = crud.estatistica.get_do_dia(db, usuario_id=usuario.id, dia=as_(10).date())
    assert stats.receita_diaria == Decimal("0")
    assert stats.total_pedidos == 0
    assert stats.caixa_atual == Decimal("0")
    assert stats.ultimo_reset_em is not None

    # Só um reset por dia
    assert verificar_e_resetar(db, usuario_id=usuario.id, momento=as_(17, 45)) is False

    # Pedidos finalizados antes do reset não voltam para a receita
    stats = sincronizar_estatisticas(db, usuario_id=usuario.id, momento=as_(18))
    assert stats.receita_diaria == Decimal("0")

    d = _criar_pedido(db, usuario, as_(18, 10), total="15.50")
    assert d.numero_pedido == 4
    _finalizar(db, d, as_(18, 20))
    stats = sincronizar_estatisticas(db, usuario_id=usuario.id, momento=as_(18, 30))
    assert stats.receita_diaria == Decimal("15.50")
    assert stats.total_pedidos == 1
    assert stats.caixa_atual == Decimal("115.50")


def test_sincronizar_cria_estatisticas_do_dia(db, usuario):
    pedido = _criar_pedido(db, usuario, as_(11), total="30.00")
    _finalizar(db, pedido, as_(11, 20))
    stats = sincronizar_estatisticas(db, usuario_id=usuario.id, momento=as_(11, 30))
    assert stats.caixa_inicial == Decimal("0")
    assert stats.receita_diaria == Decimal("30.00")
    assert stats.caixa_atual == Decimal("30.00")


def test_quadro_pede_abertura_de_caixa(db, usuario):
    quadro = carregar_quadro(db, usuario=usuario, momento=as_(9))
    assert quadro.abrir_caixa is True
    assert quadro.estatisticas is None
    assert quadro.proximo_numero_pedido == 1
    assert [c.id for c in quadro.colunas] == ["pedidos", "preparando", "pronto", "finalizados"]


def test_quadro_executa_reset_ao_carregar(db, usuario):
    abrir_caixa(db, usuario_id=usuario.id, valor_inicial=Decimal("20"), momento=as_(10))
    _criar_pedido(db, usuario, as_(11))
    finalizado = _criar_pedido(db, usuario, as_(11, 5))
    _finalizar(db, finalizado, as_(11, 30))

    quadro = carregar_quadro(db, usuario=usuario, momento=as_(17, 10))
    assert quadro.reset_realizado is True
    assert quadro.abrir_caixa is False
    assert quadro.pedidos == []
    # O pedido finalizado fica gravado, mas fora da janela após o reset
    assert quadro.pedidos_finalizados == []
    assert quadro.proximo_numero_pedido == 3
    assert db.query(Pedido).filter(Pedido.id == finalizado.id).count() == 1


def test_reset_libera_mesas_dos_pedidos_removidos(db, usuario):
    crud.mesa.configurar(db, usuario_id=usuario.id, quantidade=3)
    abrir_caixa(db, usuario_id=usuario.id, valor_inicial=Decimal("0"), momento=as_(10))
    _criar_pedido(db, usuario, as_(11), numero_mesa=1)
    finalizado = _criar_pedido(db, usuario, as_(11, 10), numero_mesa=2)
    _finalizar(db, finalizado, as_(11, 40))
    _criar_pedido(db, usuario, as_(12), numero_mesa=2)
    assert crud.mesa.get_by_numero(db, usuario_id=usuario.id, numero=1).status == StatusMesa.OCUPADA

    assert verificar_e_resetar(db, usuario_id=usuario.id, momento=as_(17, 30)) is True

    db.expire_all()
    for numero in (1, 2, 3):
        assert crud.mesa.get_by_numero(db, usuario_id=usuario.id, numero=numero).status == StatusMesa.LIVRE
    # Mesa liberada volta a aceitar pedidos
    assert _criar_pedido(db, usuario, as_(18), numero_mesa=1).numero_mesa == 1


def test_tarefas_periodicas_sincronizam_e_resetam(db, usuario, monkeypatch):
    from conftest import TestingSessionLocal

    from app.services import tarefas_periodicas

    monkeypatch.setattr(tarefas_periodicas, "SessionLocal", TestingSessionLocal)
    abrir_caixa(db, usuario_id=usuario.id, valor_inicial=Decimal("50"), momento=as_(10))
    pedido = _criar_pedido(db, usuario, as_(11), total="20.00")
    _finalizar(db, pedido, as_(11, 30))
    _criar_pedido(db, usuario, as_(12))
    db.commit()

    assert tarefas_periodicas.usuarios_com_caixa_aberto(as_(12).date()) == [usuario.id]
    assert tarefas_periodicas.sincronizar_usuarios(as_(12)) == 1
    db.expire_all()
    stats = crud.estatistica.get_do_dia(db, usuario_id=usuario.id, dia=as_(12).date())
    assert stats.receita_diaria == Decimal("20.00")
    assert stats.caixa_atual == Decimal("70.00")

    assert tarefas_periodicas.resetar_usuarios(as_(16)) == []
    assert tarefas_periodicas.resetar_usuarios(as_(17, 30)) == [usuario.id]
    assert tarefas_periodicas.resetar_usuarios(as_(17, 45)) == []
    db.expire_all()
    stats = crud.estatistica.get_do_dia(db, usuario_id=usuario.id, dia=as_(12).date())
    assert stats.receita_diaria == Decimal("0")
    assert stats.ultimo_reset_em is not None
    assert [p.id for p in db.query(Pedido).all()] == [pedido.id]
