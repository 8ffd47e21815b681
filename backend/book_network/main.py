"""
Ponto de entrada da aplicação FastAPI.

Este módulo configura a aplicação FastAPI, inclui rotas, registra os
handlers de exceção e define o ciclo de vida (startup/shutdown).
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from book_network.api.v1.router import api_router
from book_network.core.config import get_settings
from book_network.core.deps import get_email_service
from book_network.core.handlers import register_exception_handlers
from book_network.core.logging import get_logger, setup_logging
from book_network.db.redis import check_redis_connection, close_redis, init_redis
from book_network.db.session import check_database_connection, engine
from book_network.schemas.health import HealthResponse

settings = get_settings()
logger = get_logger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gerencia o ciclo de vida da aplicação.

    Startup:
        - Configura logging
        - Conecta ao Redis (rate limiting)
        - Verifica conexão com PostgreSQL

    Shutdown:
        - Aguarda emails pendentes
        - Fecha conexão com Redis
        - Fecha pool de conexões do banco
    """
    # Startup
    setup_logging()
    logger.info(f"Iniciando {settings.APP_NAME} em ambiente {settings.ENVIRONMENT}")

    try:
        await init_redis()
        if await check_redis_connection():
            logger.info("Conexão com Redis estabelecida")
        else:
            logger.warning("Redis não disponível - rate limiting desabilitado")
    except Exception as e:
        logger.warning(f"Falha ao conectar ao Redis: {e}")

    try:
        success, error = await check_database_connection()
        if success:
            logger.info("Conexão com PostgreSQL estabelecida")
        else:
            logger.warning(f"PostgreSQL não disponível: {error}")
    except Exception as e:
        logger.warning(f"Falha ao conectar ao PostgreSQL: {e}")

    yield

    # Shutdown
    logger.info(f"Encerrando {settings.APP_NAME}")
    await get_email_service().wait_pending()
    await close_redis()
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="API REST da rede social de empréstimo de livros",
    version=API_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Inclui rotas da API v1
app.include_router(api_router)


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Verifica status da aplicação",
    description="Retorna o status atual da aplicação e informações básicas do ambiente.",
)
async def health_check() -> HealthResponse:
    """
    Endpoint de healthcheck para monitoramento.

    Retorna status da aplicação, nome e ambiente.
    """
    return HealthResponse(
        status="healthy",
        app_name=settings.APP_NAME,
        version=API_VERSION,
        environment=settings.ENVIRONMENT,
    )


def run() -> None:
    """Sobe o servidor uvicorn com HOST e PORT da configuração."""
    uvicorn.run(
        "book_network.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
