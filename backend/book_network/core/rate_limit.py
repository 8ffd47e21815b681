"""
Rate limiting dos endpoints de autenticação usando Redis (janela fixa).

Cada cliente (email do JWT ou IP) tem um contador por janela; acima do
limite a resposta é 429 com Retry-After. Sem Redis o limite não é aplicado.
Limites em RATE_LIMIT_REQUESTS e RATE_LIMIT_WINDOW_SECONDS; desligado com
RATE_LIMIT_ENABLED=false.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from book_network.core.config import get_settings
from book_network.core.security import decode_token
from book_network.db import redis as redis_db

logger = logging.getLogger(__name__)
settings = get_settings()
security = HTTPBearer(auto_error=False)


class RateLimiter:
    """Dependency que conta requests por cliente sob um prefixo de chave no Redis."""

    def __init__(self, key_prefix: str):
        self.key_prefix = key_prefix

    async def __call__(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    ) -> None:
        """
        Verifica rate limit.

        Raises:
            HTTPException 429: Rate limit excedido
        """
        if not settings.RATE_LIMIT_ENABLED:
            return

        # Se Redis não disponível, permite passagem (fail-open)
        client = redis_db.redis_client
        if client is None:
            return

        identifier = self._get_identifier(request, credentials)
        key = f"{self.key_prefix}:{identifier}"

        try:
            current = await client.incr(key)

            # Primeiro request da janela define o TTL
            if current == 1:
                await client.expire(key, settings.RATE_LIMIT_WINDOW_SECONDS)

            if current > settings.RATE_LIMIT_REQUESTS:
                ttl = await client.ttl(key)
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail=f"Rate limit excedido. Tente novamente em {ttl} segundos.",
                    headers={"Retry-After": str(ttl)},
                )
        except HTTPException:
            raise
        except Exception as e:
            # Em caso de erro no Redis, permite passagem (fail-open)
            logger.warning(f"Rate limit indisponível: {e}")

    def _get_identifier(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials],
    ) -> str:
        """
        Obtém identificador único para o rate limit.

        Prioridade:
            1. subject (email) do JWT
            2. IP do cliente (primeiro IP de X-Forwarded-For, se houver)
        """
        if credentials:
            payload = decode_token(credentials.credentials)
            if payload and "sub" in payload:
                return f"user:{payload['sub']}"

        client_ip = request.client.host if request.client else "unknown"

        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            client_ip = forwarded.split(",")[0].strip()

        return f"ip:{client_ip}"


rate_limit_auth = RateLimiter(key_prefix="rate_limit:auth")
