"""
Schemas Pydantic para Book e histórico de empréstimos.
"""

import base64
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from book_network.schemas.base import BaseSchema

if TYPE_CHECKING:
    from book_network.models.book import Book
    from book_network.models.history import BookTransactionHistory


class BookRequest(BaseSchema):
    """Dados para cadastrar um livro."""
    title: str = Field("", examples=["Dom Casmurro"])
    author_name: str = Field("", examples=["Machado de Assis"])
    isbn: str = Field("", examples=["978-8535910667"])
    synopsis: str = Field("", examples=["Bentinho e Capitu..."])
    shareable: bool = False


class BookResponse(BaseModel):
    """Livro com nome do dono e capa (base64)."""
    id: int
    title: str
    author_name: str
    isbn: str
    synopsis: str
    owner: str | None = None
    cover: str | None = None
    archived: bool
    shareable: bool

    @classmethod
    def from_book(cls, book: "Book", cover: bytes | None = None) -> "BookResponse":
        """
        Cria BookResponse a partir de um Book.

        Args:
            book: Objeto Book com owner carregado
            cover: Conteúdo da imagem de capa, se houver
        """
        owner = getattr(book, "owner", None)
        return cls(
            id=book.id,
            title=book.title,
            author_name=book.author_name,
            isbn=book.isbn,
            synopsis=book.synopsis,
            owner=owner.full_name if owner else None,
            cover=base64.b64encode(cover).decode("ascii") if cover else None,
            archived=book.archived,
            shareable=book.shareable,
        )


class BorrowedBookResponse(BaseModel):
    """Livro visto pela ótica de uma transação de empréstimo."""
    id: int
    transaction_id: int
    title: str
    author_name: str
    isbn: str
    returned: bool
    return_approved: bool

    @classmethod
    def from_history(cls, history: "BookTransactionHistory") -> "BorrowedBookResponse":
        book = history.book
        return cls(
            id=book.id,
            transaction_id=history.id,
            title=book.title,
            author_name=book.author_name,
            isbn=book.isbn,
            returned=history.returned,
            return_approved=history.return_approved,
        )
