# app/services/cep_service.py
import logging
from typing import Optional

import httpx

from app.core.config import settings
from app.schemas.cep import CepSchemas
from app.utils.formatacao import limpar_digitos

logger = logging.getLogger(__name__)


def _montar_rua(logradouro: str, bairro: str) -> str:
    if logradouro and bairro:
        return f"{logradouro}, {bairro}"
    return logradouro or bairro


async def buscar_cep(cep: str, client: Optional[httpx.AsyncClient] = None) -> Optional[CepSchemas]:
    """
    Consulta o ViaCEP. Qualquer falha devolve None e o endereço
    segue sendo preenchido manualmente.
    """
    digitos = limpar_digitos(cep)
    if len(digitos) != 8:
        return None

    url = f"{settings.VIACEP_URL}/{digitos}/json/"
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.VIACEP_TIMEOUT_SECONDS) as novo_client:
                response = await novo_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        dados = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Erro ao buscar CEP %s: %s", digitos, e)
        return None

    if not isinstance(dados, dict) or dados.get("erro"):
        return None

    logradouro = dados.get("logradouro") or ""
    bairro = dados.get("bairro") or ""
    return CepSchemas(
        cep=dados.get("cep") or digitos,
        logradouro=logradouro,
        complemento=dados.get("complemento") or "",
        bairro=bairro,
        localidade=dados.get("localidade") or "",
        uf=dados.get("uf") or "",
        rua=_montar_rua(logradouro, bairro),
    )
