"""
Repository para o histórico de empréstimos (BookTransactionHistory).
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.models.book import Book
from book_network.models.history import BookTransactionHistory
from book_network.repositories.base import BaseRepository


class BookTransactionHistoryRepository(BaseRepository[BookTransactionHistory]):
    """Repository para operações de BookTransactionHistory."""

    def __init__(self, db: AsyncSession):
        super().__init__(BookTransactionHistory, db)

    async def find_all_borrowed_books(
        self,
        user_id: int,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[BookTransactionHistory], int]:
        """Transações em que o usuário é quem pegou emprestado."""
        query = select(BookTransactionHistory).where(
            BookTransactionHistory.user_id == user_id,
        )
        return await self.paginate(query, page, page_size)

    async def find_all_returned_books(
        self,
        owner_id: int,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[BookTransactionHistory], int]:
        """Transações de livros cujo dono é o usuário (livros que ele emprestou)."""
        query = (
            select(BookTransactionHistory)
            .join(Book, BookTransactionHistory.book_id == Book.id)
            .where(Book.owner_id == owner_id)
        )
        return await self.paginate(query, page, page_size)

    async def is_already_borrowed_by_user(self, book_id: int, user_id: int) -> bool:
        """Verifica se existe transação aberta (não devolvida) do usuário para o livro."""
        result = await self.db.execute(
            select(func.count(BookTransactionHistory.id)).where(
                BookTransactionHistory.book_id == book_id,
                BookTransactionHistory.user_id == user_id,
                BookTransactionHistory.returned.is_(False),
            )
        )
        return result.scalar_one() > 0

    async def find_open_by_book_and_user(
        self,
        book_id: int,
        user_id: int,
    ) -> BookTransactionHistory | None:
        """Transação aberta (não devolvida nem aprovada) do usuário para o livro."""
        result = await self.db.execute(
            select(BookTransactionHistory).where(
                BookTransactionHistory.book_id == book_id,
                BookTransactionHistory.user_id == user_id,
                BookTransactionHistory.returned.is_(False),
                BookTransactionHistory.return_approved.is_(False),
            )
        )
        return result.scalar_one_or_none()

    async def find_returned_by_book_and_owner(
        self,
        book_id: int,
        owner_id: int,
    ) -> BookTransactionHistory | None:
        """
        Transação devolvida e ainda não aprovada de um livro do dono.

        Se houver mais de uma, retorna a mais antiga.
        """
        result = await self.db.execute(
            select(BookTransactionHistory)
            .join(Book, BookTransactionHistory.book_id == Book.id)
            .where(
                BookTransactionHistory.book_id == book_id,
                Book.owner_id == owner_id,
                BookTransactionHistory.returned.is_(True),
                BookTransactionHistory.return_approved.is_(False),
            )
            .order_by(BookTransactionHistory.created_at, BookTransactionHistory.id)
            .limit(1)
        )
        return result.scalar_one_or_none()
