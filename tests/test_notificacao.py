from urllib.parse import unquote

from app.db.models.pedido import ColunaKanban, Pedido
from app.services import notificacao_service
from app.services.notificacao_service import (
    MENSAGEM_ENTREGA,
    MENSAGEM_PADRAO,
    MENSAGEM_RETIRADA,
    mensagem_de_finalizacao,
    mensagem_de_status,
    montar_link_whatsapp,
)


def test_link_adiciona_codigo_do_pais():
    link = montar_link_whatsapp("(11) 98888-7777", "Olá")
    assert link.startswith("https://wa.me/5511988887777?text=")


def test_link_mantem_codigo_do_pais_existente():
    link = montar_link_whatsapp("+55 11 98888-7777", "Olá")
    assert link.startswith("https://wa.me/5511988887777?text=")


def test_link_codifica_a_mensagem():
    link = montar_link_whatsapp("11988887777", MENSAGEM_RETIRADA)
    texto = link.split("?text=", 1)[1]
    assert " " not in texto
    assert "%20" in texto
    assert unquote(texto) == MENSAGEM_RETIRADA


def test_mensagens_de_status():
    assert mensagem_de_status(ColunaKanban.PREPARANDO).startswith("Seu pedido está em preparo")
    assert mensagem_de_status("pronto") == "Seu pedido foi embalado 📦"
    assert mensagem_de_status("pedidos") == MENSAGEM_PADRAO
    assert mensagem_de_status("qualquer") == MENSAGEM_PADRAO


def test_finalizacao_de_mesa_nao_notifica():
    pedido = Pedido(telefone="11988887777", numero_mesa=3, endereco=None)
    assert mensagem_de_finalizacao(pedido) is None


def test_finalizacao_sem_telefone_nao_notifica():
    pedido = Pedido(telefone="  ", numero_mesa=None, endereco=None)
    assert mensagem_de_finalizacao(pedido) is None


def test_finalizacao_com_endereco_e_entrega():
    pedido = Pedido(
        telefone="11988887777",
        numero_mesa=None,
        endereco={"rua": "Rua A", "numero": "10", "cep": "", "referencia": ""},
    )
    assert mensagem_de_finalizacao(pedido) == MENSAGEM_ENTREGA


def test_finalizacao_sem_endereco_e_retirada():
    pedido = Pedido(telefone="11988887777", numero_mesa=None, endereco=None)
    assert mensagem_de_finalizacao(pedido) == MENSAGEM_RETIRADA


def test_montar_notificacao():
    notificacao = notificacao_service.montar_notificacao("11988887777", MENSAGEM_PADRAO)
    assert notificacao.telefone == "11988887777"
    assert notificacao.mensagem == MENSAGEM_PADRAO
    assert notificacao.link.startswith("https://wa.me/55")
