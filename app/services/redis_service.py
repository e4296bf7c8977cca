# app/services/redis_service.py
import json
import logging
from typing import Any, Dict, Optional

import redis.asyncio as redis # Using asyncio version for FastAPI
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)

CANAL_WHATSAPP = "notificacoes_whatsapp"


def canal_do_quadro(usuario_id: Any) -> str:
    return f"usuario_{usuario_id}_quadro"


class RedisClient:
    def __init__(
        self,
        host: str = settings.REDIS_HOST,
        port: int = settings.REDIS_PORT,
        enabled: bool = settings.REDIS_ENABLED,
    ):
        self.host = host
        self.port = port
        self.enabled = enabled
        self._client: Optional[redis.Redis] = None

    async def connect(self):
        if not self.enabled or self._client:
            return
        try:
            self._client = redis.Redis(host=self.host, port=self.port, decode_responses=True)
            # Test connection
            await self._client.ping()
            logger.info("Conectado ao Redis em %s:%s", self.host, self.port)
        except RedisError as e:
            logger.warning("Falha ao conectar ao Redis: %s", e)
            self._client = None # Ensure client is None if connection failed

    async def disconnect(self):
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Desconectado do Redis.")

    @property
    async def client(self) -> Optional[redis.Redis]:
        if not self._client:
            await self.connect() # Attempt to connect if not already connected
        return self._client

    async def publish_message(self, channel: str, message: Dict[str, Any]) -> bool:
        """Publica um evento JSON. Redis é opcional: falhas são apenas registradas."""
        if not self.enabled:
            return False
        r = await self.client
        if not r:
            logger.warning("Não foi possível publicar no canal %s: cliente Redis não conectado.", channel)
            return False
        try:
            await r.publish(channel, json.dumps(message, default=str))
        except RedisError as e:
            logger.warning("Erro ao publicar no canal %s: %s", channel, e)
            return False
        logger.debug("Mensagem publicada no canal %s", channel)
        return True


# Instância global para ser usada na aplicação
redis_client = RedisClient()


# Funções para serem chamadas no startup e shutdown da aplicação FastAPI
async def startup_redis_client():
    await redis_client.connect()


async def shutdown_redis_client():
    await redis_client.disconnect()
