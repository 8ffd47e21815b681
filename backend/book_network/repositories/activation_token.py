"""
Repository para códigos de ativação de conta.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.models.activation_token import ActivationToken
from book_network.repositories.base import BaseRepository


class ActivationTokenRepository(BaseRepository[ActivationToken]):
    """Repository para operações de ActivationToken."""

    def __init__(self, db: AsyncSession):
        super().__init__(ActivationToken, db)

    async def get_by_token(self, token: str) -> ActivationToken | None:
        """Busca código de ativação (com o usuário dono)."""
        result = await self.db.execute(
            select(ActivationToken).where(ActivationToken.token == token)
        )
        return result.scalar_one_or_none()

    async def token_exists(self, token: str) -> bool:
        return await self.get_by_token(token) is not None
