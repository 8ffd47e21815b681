"""
Testes de integração do fluxo de conta: cadastro, ativação e login.
"""

import pytest
from httpx import AsyncClient

from book_network.core.security import decode_token
DEFAULT_PASSWORD = "senha-segura-123"


@pytest.mark.anyio
async def test_register_activate_and_authenticate(client: AsyncClient, email_service, registration_payload):
    response = await client.post(
        "/api/v1/auth/register", json=registration_payload("ana@example.com")
    )
    assert response.status_code == 202

    code = email_service.last_code_for("ana@example.com")
    assert len(code) == 6 and code.isdigit()

    # Conta pendente não autentica
    response = await client.post(
        "/api/v1/auth/authenticate",
        json={"email": "ana@example.com", "password": DEFAULT_PASSWORD},
    )
    assert response.status_code == 403
    assert response.json()["businessErrorCode"] == 303

    response = await client.get("/api/v1/auth/activate-account", params={"token": code})
    assert response.status_code == 200

    response = await client.post(
        "/api/v1/auth/authenticate",
        json={"email": "ana@example.com", "password": DEFAULT_PASSWORD},
    )
    assert response.status_code == 200
    payload = decode_token(response.json()["token"])
    assert payload["sub"] == "ana@example.com"
    assert payload["fullName"] == "Ana Souza"
    assert payload["authorities"] == ["USER"]


@pytest.mark.anyio
async def test_activation_code_is_single_use(client: AsyncClient, email_service, registration_payload):
    await client.post("/api/v1/auth/register", json=registration_payload("bia@example.com"))
    code = email_service.last_code_for("bia@example.com")

    assert (await client.get("/api/v1/auth/activate-account", params={"token": code})).status_code == 200

    response = await client.get("/api/v1/auth/activate-account", params={"token": code})
    assert response.status_code == 400
    assert "já utilizado" in response.json()["error"]


@pytest.mark.anyio
async def test_activate_unknown_code(client: AsyncClient):
    response = await client.get("/api/v1/auth/activate-account", params={"token": "000000x"})

    assert response.status_code == 400
    assert response.json() == {"error": "Código de ativação inválido"}


@pytest.mark.anyio
async def test_register_duplicate_email(client: AsyncClient, registration_payload):
    payload = registration_payload("caio@example.com")
    assert (await client.post("/api/v1/auth/register", json=payload)).status_code == 202

    response = await client.post("/api/v1/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["validationErrors"] == ["Email já cadastrado"]


@pytest.mark.anyio
async def test_register_invalid_payload(client: AsyncClient, email_service):
    response = await client.post(
        "/api/v1/auth/register",
        json={"firstname": "", "lastname": "Souza", "email": "sem-arroba", "password": "123"},
    )

    assert response.status_code == 400
    body = response.json()
    assert set(body["errors"]) == {"firstname", "email", "password"}
    assert "Email em formato inválido" in body["validationErrors"]
    assert "businessErrorCode" not in body
    assert email_service.sent == []


@pytest.mark.anyio
async def test_register_malformed_json(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/register",
        content="{nao e json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["validationErrors"]


@pytest.mark.anyio
async def test_register_rolled_back_when_email_fails(
    client: AsyncClient, email_service, registration_payload
):
    email_service.fail = True
    payload = registration_payload("duda@example.com")

    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 500

    # Cadastro desfeito: o mesmo email pode ser usado novamente
    email_service.fail = False
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 202


@pytest.mark.anyio
async def test_authenticate_bad_credentials(client: AsyncClient, create_user_headers):
    await create_user_headers("edu@example.com")

    response = await client.post(
        "/api/v1/auth/authenticate",
        json={"email": "edu@example.com", "password": "senha-errada"},
    )

    assert response.status_code == 403
    body = response.json()
    assert body["businessErrorCode"] == 304
    assert body["businessErrorDescription"] == "Login e / ou senha incorretos"


@pytest.mark.anyio
async def test_protected_route_requires_token(client: AsyncClient, create_user_headers):
    headers = await create_user_headers("fabi@example.com")

    assert (await client.get("/api/v1/books")).status_code == 401
    assert (await client.get(
        "/api/v1/books", headers={"Authorization": "Bearer invalid.token.here"}
    )).status_code == 401
    assert (await client.get(
        "/api/v1/books", headers={"Authorization": headers["Authorization"].replace("Bearer", "Basic")}
    )).status_code == 401
    assert (await client.get("/api/v1/books", headers=headers)).status_code == 200


@pytest.mark.anyio
async def test_pending_account_with_wrong_password_reports_disabled(
    client: AsyncClient, registration_payload
):
    await client.post("/api/v1/auth/register", json=registration_payload("gabi@example.com"))

    response = await client.post(
        "/api/v1/auth/authenticate",
        json={"email": "gabi@example.com", "password": "senha-errada"},
    )

    assert response.status_code == 403
    assert response.json()["businessErrorCode"] == 303


@pytest.mark.anyio
async def test_unknown_email_reports_bad_credentials(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/authenticate",
        json={"email": "ninguem@example.com", "password": DEFAULT_PASSWORD},
    )

    assert response.status_code == 403
    assert response.json()["businessErrorCode"] == 304
