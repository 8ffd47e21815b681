"""
Repository para operações de Role no banco de dados.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.models.user import Role
from book_network.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Repository para operações de Role."""

    def __init__(self, db: AsyncSession):
        super().__init__(Role, db)

    async def get_by_name(self, name: str) -> Role | None:
        """Busca role pelo nome."""
        result = await self.db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()
