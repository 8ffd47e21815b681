"""
Fixtures compartilhadas para testes.

Os testes de integração usam SQLite em memória (aiosqlite) no lugar do
PostgreSQL e um EmailService que registra os emails em vez de enviá-los.
"""

import os

# Antes de importar a aplicação: envio de email síncrono e sem Redis
os.environ["MAIL_FAILURE_POLICY"] = "strict"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from typing import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import book_network.models  # noqa: F401 - registra os models no metadata
from book_network.core.deps import get_email_service, get_file_storage
from book_network.core.exceptions import EmailDeliveryError
from book_network.db.seed import create_roles
from book_network.db.session import Base, get_db
from book_network.main import app
from book_network.services.file_storage import FileStorageService
from book_network.services.mail import EmailService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "senha-segura-123"


class RecordingEmailService(EmailService):
    """EmailService que guarda os emails em memória."""

    def __init__(self):
        super().__init__()
        self.sent: list[dict] = []
        self.fail = False

    async def send_email(self, **kwargs) -> None:
        if self.fail:
            raise EmailDeliveryError(f"Não foi possível enviar o email para {kwargs['to']}")
        self.sent.append(kwargs)

    def last_code_for(self, email: str) -> str:
        codes = [m["activation_code"] for m in self.sent if m["to"] == email]
        assert codes, f"Nenhum email enviado para {email}"
        return codes[-1]


# ==========================================
# Event loop configuration
# ==========================================

@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


# ==========================================
# Database fixtures
# ==========================================

@pytest.fixture
async def test_engine():
    """
    Engine SQLite em memória, recriado a cada teste.

    StaticPool mantém uma única conexão, então todas as sessões
    enxergam o mesmo banco em memória.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    async with factory() as session:
        await create_roles(session)
    return factory


# ==========================================
# HTTP Client fixtures
# ==========================================

@pytest.fixture
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
async def client(session_factory, email_service, tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """
    Cliente HTTP assíncrono para testes.

    Substitui banco, envio de email e diretório de uploads.
    """
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_file_storage] = lambda: FileStorageService(str(tmp_path))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ==========================================
# Auth fixtures
# ==========================================

@pytest.fixture
def registration_payload() -> Callable[..., dict]:
    def _payload(email: str, firstname: str = "Ana", lastname: str = "Souza") -> dict:
        return {
            "firstname": firstname,
            "lastname": lastname,
            "email": email,
            "password": DEFAULT_PASSWORD,
        }
    return _payload


@pytest.fixture
def create_user_headers(
    client: AsyncClient,
    email_service: RecordingEmailService,
    registration_payload,
) -> Callable[..., Awaitable[dict]]:
    """
    Cadastra, ativa e autentica um usuário pela API.

    Retorna os headers de autenticação do usuário.
    """
    async def _create(email: str, firstname: str = "Ana", lastname: str = "Souza") -> dict:
        response = await client.post(
            "/api/v1/auth/register",
            json=registration_payload(email, firstname, lastname),
        )
        assert response.status_code == 202, response.text

        code = email_service.last_code_for(email)
        response = await client.get("/api/v1/auth/activate-account", params={"token": code})
        assert response.status_code == 200, response.text

        response = await client.post(
            "/api/v1/auth/authenticate",
            json={"email": email, "password": DEFAULT_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _create
