"""
Service para lógica de negócio de livros e empréstimos.

Estados de um empréstimo (por livro e usuário):
    AVAILABLE -> BORROWED -> RETURNED -> RETURN_APPROVED

Regras de borrow/return/approve, verificadas nesta ordem (a primeira
que falhar vence):
    1. Livro deve existir
    2. Livro não pode estar arquivado e deve ser compartilhável
    3. Regra de dono (não pode emprestar o próprio livro / só o dono aprova)
    4. Estado da transação compatível com a operação
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.core.exceptions import EntityNotFoundError, OperationNotPermittedError
from book_network.models.book import Book
from book_network.models.history import BookTransactionHistory
from book_network.models.user import User
from book_network.repositories.book import BookRepository
from book_network.repositories.history import BookTransactionHistoryRepository
from book_network.schemas.base import PaginatedResponse
from book_network.schemas.book import BookRequest, BookResponse, BorrowedBookResponse
from book_network.schemas.validators import ensure_valid, validate_book_request
from book_network.services.file_storage import FileStorageService

logger = logging.getLogger(__name__)

ALREADY_BORROWED = "O livro solicitado já está emprestado"
NOT_BORROWABLE = (
    "O livro solicitado não pode ser emprestado pois está arquivado "
    "ou não é compartilhável"
)


class BookService:
    """Service para operações de livros e do ciclo de empréstimo."""

    def __init__(
        self,
        db: AsyncSession,
        book_repo: BookRepository,
        history_repo: BookTransactionHistoryRepository,
        file_storage: FileStorageService,
    ):
        self.db = db
        self.book_repo = book_repo
        self.history_repo = history_repo
        self.file_storage = file_storage

    # ==========================================
    # Catálogo
    # ==========================================

    async def save(self, data: BookRequest, connected_user: User) -> int:
        """
        Cadastra um livro do usuário conectado.

        Returns:
            ID do livro criado
        """
        ensure_valid(validate_book_request(data))

        book = Book(
            title=data.title,
            author_name=data.author_name,
            isbn=data.isbn,
            synopsis=data.synopsis,
            shareable=data.shareable,
            archived=False,
            owner=connected_user,
            created_by=connected_user.id,
        )
        await self.book_repo.save(book)
        await self.db.commit()
        return book.id

    async def get_book(self, book_id: int) -> Book:
        """
        Busca livro por ID.

        Raises:
            EntityNotFoundError: Livro não encontrado
        """
        book = await self.book_repo.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError(f"Nenhum livro encontrado com ID: {book_id}")
        return book

    async def find_by_id(self, book_id: int) -> BookResponse:
        book = await self.get_book(book_id)
        return self._to_response(book)

    async def find_all_books(
        self,
        page: int,
        size: int,
        connected_user: User,
    ) -> PaginatedResponse[BookResponse]:
        """Livros que o usuário pode pegar emprestado, mais recentes primeiro."""
        books, total = await self.book_repo.find_displayable(connected_user.id, page, size)
        return PaginatedResponse.create(
            items=[self._to_response(book) for book in books],
            total=total,
            page=page,
            page_size=size,
        )

    async def find_all_books_by_owner(
        self,
        page: int,
        size: int,
        connected_user: User,
    ) -> PaginatedResponse[BookResponse]:
        """Livros do usuário conectado."""
        books, total = await self.book_repo.find_by_owner(connected_user.id, page, size)
        return PaginatedResponse.create(
            items=[self._to_response(book) for book in books],
            total=total,
            page=page,
            page_size=size,
        )

    async def find_all_borrowed_books(
        self,
        page: int,
        size: int,
        connected_user: User,
    ) -> PaginatedResponse[BorrowedBookResponse]:
        """Transações em que o usuário conectado pegou o livro emprestado."""
        history, total = await self.history_repo.find_all_borrowed_books(
            connected_user.id, page, size
        )
        return PaginatedResponse.create(
            items=[BorrowedBookResponse.from_history(h) for h in history],
            total=total,
            page=page,
            page_size=size,
        )

    async def find_all_returned_books(
        self,
        page: int,
        size: int,
        connected_user: User,
    ) -> PaginatedResponse[BorrowedBookResponse]:
        """Transações de livros que o usuário conectado emprestou a outros."""
        history, total = await self.history_repo.find_all_returned_books(
            connected_user.id, page, size
        )
        return PaginatedResponse.create(
            items=[BorrowedBookResponse.from_history(h) for h in history],
            total=total,
            page=page,
            page_size=size,
        )

    # ==========================================
    # Status do livro (somente dono)
    # ==========================================

    async def update_shareable_status(self, book_id: int, connected_user: User) -> int:
        book = await self.get_book(book_id)
        if book.owner_id != connected_user.id:
            raise OperationNotPermittedError(
                "Você não pode alterar o status de compartilhamento de livros de outros usuários"
            )

        book.shareable = not book.shareable
        book.last_modified_by = connected_user.id
        await self.db.commit()
        return book_id

    async def update_archived_status(self, book_id: int, connected_user: User) -> int:
        book = await self.get_book(book_id)
        if book.owner_id != connected_user.id:
            raise OperationNotPermittedError(
                "Você não pode alterar o status de arquivamento de livros de outros usuários"
            )

        book.archived = not book.archived
        book.last_modified_by = connected_user.id
        await self.db.commit()
        return book_id

    # ==========================================
    # Empréstimo
    # ==========================================

    async def borrow_book(self, book_id: int, connected_user: User) -> int:
        """
        Registra o empréstimo de um livro para o usuário conectado.

        Returns:
            ID da transação criada

        Raises:
            EntityNotFoundError: Livro não encontrado
            OperationNotPermittedError: Livro arquivado/não compartilhável,
                livro do próprio usuário ou já emprestado por ele
        """
        book = await self.get_book(book_id)
        self._ensure_borrowable(book)

        if book.owner_id == connected_user.id:
            raise OperationNotPermittedError("Você não pode pegar emprestado seu próprio livro")

        if await self.history_repo.is_already_borrowed_by_user(book_id, connected_user.id):
            raise OperationNotPermittedError(ALREADY_BORROWED)

        transaction = BookTransactionHistory(
            book=book,
            user=connected_user,
            returned=False,
            return_approved=False,
            created_by=connected_user.id,
        )
        try:
            await self.history_repo.save(transaction)
            await self.db.commit()
        except IntegrityError:
            # Outro request criou a transação aberta entre a verificação e o insert
            await self.db.rollback()
            raise OperationNotPermittedError(ALREADY_BORROWED)

        logger.info(f"Livro {book_id} emprestado para usuário {connected_user.id}")
        return transaction.id

    async def return_borrowed_book(self, book_id: int, connected_user: User) -> int:
        """
        Marca como devolvida a transação aberta do usuário para o livro.

        Returns:
            ID da transação

        Raises:
            EntityNotFoundError: Livro não encontrado
            OperationNotPermittedError: Livro arquivado/não compartilhável,
                livro do próprio usuário ou nenhuma transação aberta
        """
        book = await self.get_book(book_id)
        self._ensure_borrowable(book)

        if book.owner_id == connected_user.id:
            raise OperationNotPermittedError(
                "Você não pode pegar emprestado ou devolver seu próprio livro"
            )

        transaction = await self.history_repo.find_open_by_book_and_user(
            book_id, connected_user.id
        )
        if transaction is None:
            raise OperationNotPermittedError("Você não pegou este livro emprestado")

        transaction.returned = True
        transaction.last_modified_by = connected_user.id
        await self.db.commit()
        return transaction.id

    async def approve_return_borrowed_book(self, book_id: int, connected_user: User) -> int:
        """
        Dono aprova a devolução de um livro.

        Returns:
            ID da transação

        Raises:
            EntityNotFoundError: Livro não encontrado
            OperationNotPermittedError: Livro arquivado/não compartilhável,
                usuário não é o dono ou não há devolução pendente
        """
        book = await self.get_book(book_id)
        self._ensure_borrowable(book)

        if book.owner_id != connected_user.id:
            raise OperationNotPermittedError(
                "Apenas o dono do livro pode aprovar a devolução"
            )

        transaction = await self.history_repo.find_returned_by_book_and_owner(
            book_id, connected_user.id
        )
        if transaction is None:
            raise OperationNotPermittedError(
                "O livro ainda não foi devolvido. Não é possível aprovar a devolução"
            )

        transaction.return_approved = True
        transaction.last_modified_by = connected_user.id
        await self.db.commit()
        return transaction.id

    # ==========================================
    # Capa
    # ==========================================

    async def upload_book_cover_picture(
        self,
        book_id: int,
        content: bytes,
        filename: str | None,
        connected_user: User,
    ) -> None:
        """Salva a imagem de capa de um livro do usuário conectado."""
        book = await self.get_book(book_id)
        if book.owner_id != connected_user.id:
            raise OperationNotPermittedError(
                "Você não pode alterar a capa de livros de outros usuários"
            )

        book.book_cover = self.file_storage.save_file(content, filename, connected_user.id)
        book.last_modified_by = connected_user.id
        await self.db.commit()

    # ==========================================
    # Helpers
    # ==========================================

    @staticmethod
    def _ensure_borrowable(book: Book) -> None:
        if not book.is_borrowable:
            raise OperationNotPermittedError(NOT_BORROWABLE)

    def _to_response(self, book: Book) -> BookResponse:
        return BookResponse.from_book(book, cover=self.file_storage.read_file(book.book_cover))
