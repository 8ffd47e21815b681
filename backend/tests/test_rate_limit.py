"""
Testes unitários para Rate Limiting.

Usa mocks para Redis para testar a lógica sem dependência externa.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException, Request

from book_network.core.rate_limit import RateLimiter, rate_limit_auth


def enabled_settings(mock_settings) -> None:
    mock_settings.RATE_LIMIT_ENABLED = True
    mock_settings.RATE_LIMIT_REQUESTS = 10
    mock_settings.RATE_LIMIT_WINDOW_SECONDS = 60


class TestRateLimiter:
    """Testes para o RateLimiter."""

    @pytest.fixture
    def mock_request(self):
        """Cria mock de Request."""
        request = MagicMock(spec=Request)
        request.client.host = "127.0.0.1"
        request.headers = {}
        return request

    @pytest.fixture
    def mock_credentials(self):
        """Cria mock de credenciais com JWT."""
        credentials = MagicMock()
        credentials.credentials = "fake_token"
        return credentials

    @pytest.mark.anyio
    async def test_rate_limit_disabled_allows_all(self, mock_request):
        """Quando rate limit está desabilitado, permite todas as requisições."""
        mock_redis = AsyncMock()

        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", mock_redis):
            mock_settings.RATE_LIMIT_ENABLED = False

            await rate_limit_auth(mock_request, None)

        mock_redis.incr.assert_not_called()

    @pytest.mark.anyio
    async def test_rate_limit_redis_unavailable_allows_all(self, mock_request):
        """Quando Redis não está disponível, permite (fail-open)."""
        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", None):
            enabled_settings(mock_settings)

            await rate_limit_auth(mock_request, None)

    @pytest.mark.anyio
    async def test_rate_limit_first_request_sets_ttl(self, mock_request):
        """Primeira requisição deve passar e definir TTL."""
        mock_redis = AsyncMock()
        mock_redis.incr.return_value = 1

        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", mock_redis):
            enabled_settings(mock_settings)

            await rate_limit_auth(mock_request, None)

        mock_redis.incr.assert_called_once_with("rate_limit:auth:ip:127.0.0.1")
        mock_redis.expire.assert_called_once_with("rate_limit:auth:ip:127.0.0.1", 60)

    @pytest.mark.anyio
    async def test_rate_limit_within_limit(self, mock_request):
        """Requisições dentro do limite devem passar sem redefinir o TTL."""
        mock_redis = AsyncMock()
        mock_redis.incr.return_value = 10

        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", mock_redis):
            enabled_settings(mock_settings)

            await rate_limit_auth(mock_request, None)

        mock_redis.expire.assert_not_called()

    @pytest.mark.anyio
    async def test_rate_limit_exceeded_raises_429(self, mock_request):
        """Quando limite é excedido, deve lançar 429."""
        mock_redis = AsyncMock()
        mock_redis.incr.return_value = 11
        mock_redis.ttl.return_value = 45

        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", mock_redis):
            enabled_settings(mock_settings)

            with pytest.raises(HTTPException) as exc_info:
                await rate_limit_auth(mock_request, None)

        assert exc_info.value.status_code == 429
        assert "Rate limit excedido" in exc_info.value.detail
        assert exc_info.value.headers["Retry-After"] == "45"

    @pytest.mark.anyio
    async def test_rate_limit_redis_error_fails_open(self, mock_request):
        mock_redis = AsyncMock()
        mock_redis.incr.side_effect = ConnectionError("redis fora do ar")

        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", mock_redis):
            enabled_settings(mock_settings)

            await rate_limit_auth(mock_request, None)

    @pytest.mark.anyio
    async def test_rate_limit_identifies_by_jwt_subject(self, mock_request, mock_credentials):
        """Deve identificar usuário pelo email do JWT quando autenticado."""
        mock_redis = AsyncMock()
        mock_redis.incr.return_value = 1

        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", mock_redis), \
             patch("book_network.core.rate_limit.decode_token") as mock_decode:
            enabled_settings(mock_settings)
            mock_decode.return_value = {"sub": "ana@example.com"}

            await rate_limit_auth(mock_request, mock_credentials)

        assert mock_redis.incr.call_args[0][0] == "rate_limit:auth:user:ana@example.com"

    @pytest.mark.anyio
    async def test_rate_limit_uses_forwarded_ip(self, mock_request):
        mock_request.headers = {"X-Forwarded-For": "10.0.0.5, 172.16.0.1"}
        mock_redis = AsyncMock()
        mock_redis.incr.return_value = 1

        with patch("book_network.core.rate_limit.settings") as mock_settings, \
             patch("book_network.db.redis.redis_client", mock_redis):
            enabled_settings(mock_settings)

            await RateLimiter(key_prefix="auth")(mock_request, None)

        assert mock_redis.incr.call_args[0][0] == "auth:ip:10.0.0.5"
