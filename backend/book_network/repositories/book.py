"""
Repository para operações de Book no banco de dados.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.models.book import Book
from book_network.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """Repository para operações CRUD de Book."""

    def __init__(self, db: AsyncSession):
        super().__init__(Book, db)

    async def find_displayable(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Book], int]:
        """
        Lista livros que o usuário pode pegar emprestado.

        Critérios: não arquivado, compartilhável e de outro dono.
        """
        query = select(Book).where(
            Book.archived.is_(False),
            Book.shareable.is_(True),
            Book.owner_id != user_id,
        )
        return await self.paginate(query, page, page_size)

    async def find_by_owner(
        self,
        owner_id: int,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[Book], int]:
        """Lista livros de um dono."""
        query = select(Book).where(Book.owner_id == owner_id)
        return await self.paginate(query, page, page_size)
