# app/core/logging.py
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configurar_logging(level: int = logging.INFO) -> None:
    """Configuração básica de logging, chamada uma vez no startup da aplicação."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    # O access log do uvicorn já registra cada requisição
    logging.getLogger("httpx").setLevel(logging.WARNING)


logger = logging.getLogger("balcao")
