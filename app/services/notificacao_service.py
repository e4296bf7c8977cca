# app/services/notificacao_service.py
import logging
from typing import Optional
from urllib.parse import quote

from app.core.config import settings
from app.db.models.pedido import ColunaKanban, Pedido
from app.schemas.pedido import NotificacaoSchemas
from app.services.redis_service import CANAL_WHATSAPP, redis_client
from app.utils.formatacao import limpar_digitos

logger = logging.getLogger(__name__)

MENSAGEM_ENTREGA = "Seu pedido foi e em instantes estará na sua casa, bom apetite!"
MENSAGEM_RETIRADA = "Seu pedido está pronto, já pode vir retirar"

MENSAGENS_STATUS = {
    ColunaKanban.PREPARANDO: "Seu pedido está em preparo, em momentos estará pronto 😊",
    ColunaKanban.PRONTO: "Seu pedido foi embalado 📦",
}
MENSAGEM_PADRAO = "Obrigado pelo seu pedido!"


def montar_link_whatsapp(telefone: str, mensagem: str) -> str:
    digitos = limpar_digitos(telefone)
    if not digitos.startswith(settings.WHATSAPP_COUNTRY_CODE):
        digitos = f"{settings.WHATSAPP_COUNTRY_CODE}{digitos}"
    # Mesmo conjunto de caracteres preservados pelo encodeURIComponent
    texto = quote(mensagem, safe="-_.!~*'()")
    return f"{settings.WHATSAPP_BASE_URL}/{digitos}?text={texto}"


def mensagem_de_status(coluna) -> str:
    try:
        return MENSAGENS_STATUS.get(ColunaKanban(coluna), MENSAGEM_PADRAO)
    except ValueError:
        return MENSAGEM_PADRAO


def mensagem_de_finalizacao(pedido: Pedido) -> Optional[str]:
    """
    Mensagem enviada ao cliente quando o pedido é finalizado.
    Pedidos de mesa e pedidos sem telefone não geram mensagem.
    """
    if pedido.numero_mesa:
        return None
    if not (pedido.telefone or "").strip():
        return None
    endereco = pedido.endereco or {}
    if any(str(valor).strip() for valor in endereco.values() if valor is not None):
        return MENSAGEM_ENTREGA
    return MENSAGEM_RETIRADA


def montar_notificacao(telefone: str, mensagem: str) -> NotificacaoSchemas:
    return NotificacaoSchemas(
        telefone=telefone,
        mensagem=mensagem,
        link=montar_link_whatsapp(telefone, mensagem),
    )


async def enviar_notificacao(pedido: Pedido, mensagem: str) -> NotificacaoSchemas:
    notificacao = montar_notificacao(pedido.telefone, mensagem)
    await redis_client.publish_message(
        CANAL_WHATSAPP,
        {
            "usuario_id": pedido.id_usuario,
            "pedido_id": pedido.id,
            "numero_pedido": pedido.numero_pedido,
            **notificacao.model_dump(),
        },
    )
    logger.info("Notificação do pedido #%s preparada para %s", pedido.numero_pedido, pedido.telefone)
    return notificacao


async def notificar_finalizacao(pedido: Pedido) -> Optional[NotificacaoSchemas]:
    mensagem = mensagem_de_finalizacao(pedido)
    if not mensagem:
        return None
    return await enviar_notificacao(pedido, mensagem)
