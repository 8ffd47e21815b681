"""
Model de livro compartilhado por um usuário.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from book_network.db.session import Base
from book_network.models.base import AuditMixin, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from book_network.models.user import User


class Book(Base, IdMixin, TimestampMixin, AuditMixin):
    """
    Livro cadastrado por um usuário (owner).

    Attributes:
        title: Título
        author_name: Nome do autor
        isbn: ISBN
        synopsis: Sinopse
        book_cover: Caminho da imagem de capa enviada
        archived: Livro arquivado (indisponível para empréstimo)
        shareable: Livro pode ser emprestado por outros usuários
        owner_id: FK para o dono do livro
    """
    __tablename__ = "books"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    isbn: Mapped[str] = mapped_column(String(50), nullable=False)
    synopsis: Mapped[str] = mapped_column(Text, nullable=False)
    book_cover: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    shareable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped["User"] = relationship("User", lazy="selectin")

    @property
    def is_borrowable(self) -> bool:
        """Livro disponível para empréstimo (não arquivado e compartilhável)."""
        return self.shareable and not self.archived

    def __repr__(self) -> str:
        return f"<Book {self.title}>"
