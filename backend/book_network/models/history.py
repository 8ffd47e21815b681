"""
Model do histórico de empréstimos (transações livro-usuário).
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Integer, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from book_network.db.session import Base
from book_network.models.base import AuditMixin, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from book_network.models.book import Book
    from book_network.models.user import User


class BookTransactionHistory(Base, IdMixin, TimestampMixin, AuditMixin):
    """
    Um ciclo de empréstimo de um livro por um usuário.

    Fluxo de estados:
        BORROWED (returned=False)
        -> RETURNED (returned=True)
        -> RETURN_APPROVED (return_approved=True)

    Cada novo empréstimo cria um novo registro; o histórico só cresce.

    Regras:
        - No máximo uma transação aberta (returned=False) por (livro, usuário),
          garantido pelo índice único parcial abaixo
        - return_approved só vira True depois de returned=True

    Attributes:
        book_id: FK para o livro
        user_id: FK para quem pegou emprestado
        returned: Livro devolvido pelo usuário
        return_approved: Devolução aprovada pelo dono
    """
    __tablename__ = "book_transaction_history"

    book_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    returned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    return_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    book: Mapped["Book"] = relationship("Book", lazy="selectin")
    user: Mapped["User"] = relationship("User", lazy="selectin")

    __table_args__ = (
        Index("ix_book_transaction_history_user_id", "user_id"),
        Index("ix_book_transaction_history_book_id", "book_id"),
        # Uma única transação aberta por (livro, usuário)
        Index(
            "uq_book_transaction_history_open",
            "book_id",
            "user_id",
            unique=True,
            postgresql_where=text("returned = false"),
            sqlite_where=text("returned = 0"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<BookTransactionHistory book={self.book_id} user={self.user_id} "
            f"returned={self.returned} approved={self.return_approved}>"
        )
