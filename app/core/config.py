from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Configurações básicas do projeto
    PROJECT_NAME: str = "Balcão Digital API"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # Configurações de segurança
    SECRET_KEY: str = Field(..., description="Chave usada para assinar os tokens JWT")
    ALGORITHM: str = "HS256"

    # Configurações de token
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Configurações de banco de dados
    DATABASE_URL: str = Field(..., description="URL SQLAlchemy do banco relacional")

    # Configurações opcionais (com valores padrão)
    ENVIRONMENT: str = "development"
    SUPPORT_EMAIL: str = "support@example.com"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_ENABLED: bool = True

    # Configurações de CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    # Fechamento do dia: fuso local e hora do reset diário
    TIMEZONE: str = "America/Sao_Paulo"
    DAILY_RESET_HOUR: int = Field(17, ge=0, le=23)

    # Tarefas periódicas (verificação de reset e sincronização de estatísticas)
    BACKGROUND_TASKS_ENABLED: bool = True
    RESET_CHECK_INTERVAL_SECONDS: int = 60
    STATS_SYNC_INTERVAL_SECONDS: int = 30

    # Serviços externos
    VIACEP_URL: str = "https://viacep.com.br/ws"
    VIACEP_TIMEOUT_SECONDS: float = 5.0
    WHATSAPP_BASE_URL: str = "https://wa.me"
    WHATSAPP_COUNTRY_CODE: str = "55"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignora variáveis extras não declaradas


settings = Settings()
