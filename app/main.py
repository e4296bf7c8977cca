import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configurar_logging
from app.api.v1.router import api_router_v1
from app.database import engine
from app.db.base_class import Base
from app.db import models  # noqa: F401  registra os modelos no metadata
from app.services.redis_service import shutdown_redis_client, startup_redis_client
from app.services.tarefas_periodicas import tarefas_periodicas

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configurar_logging()
    # Opcional: Criar tabelas automaticamente (em desenvolvimento)
    # Em produção, use migrações com Alembic
    if settings.ENVIRONMENT == "development":
        Base.metadata.create_all(bind=engine)
        logger.info("Tabelas criadas com sucesso (apenas em desenvolvimento)")
    await startup_redis_client()
    if settings.BACKGROUND_TASKS_ENABLED:
        await tarefas_periodicas.start()
    yield
    await tarefas_periodicas.stop()
    await shutdown_redis_client()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API do Balcão Digital - quadro de pedidos, mesas, caixa do dia e relatórios",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    contact={
        "name": "Suporte Técnico",
        "email": settings.SUPPORT_EMAIL,
    },
    license_info={
        "name": "MIT",
    },
    lifespan=lifespan,
)

# Configuração de CORS
if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Inclui todas as rotas da API V1
app.include_router(api_router_v1, prefix=settings.API_V1_STR)

@app.get("/", tags=["Root"])
async def read_root():
    return {
        "message": f"Bem-vindo à API {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}",
        "docs": "/docs",
        "status": "operacional",
        "environment": settings.ENVIRONMENT
    }

@app.get("/health", tags=["Health Check"])
async def health_check():
    """Endpoint para verificação de saúde da API"""
    return {
        "status": "healthy",
        "database": "connected" if settings.DATABASE_URL else "disconnected",
        "environment": settings.ENVIRONMENT
    }
