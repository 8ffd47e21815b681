"""
Endpoints de livros e empréstimos.

Contratos:
    - POST /books: Cadastra livro do usuário conectado
    - GET /books: Lista livros disponíveis para empréstimo
    - GET /books/owner: Lista livros do usuário conectado
    - GET /books/borrowed: Lista empréstimos do usuário conectado
    - GET /books/returned: Lista empréstimos dos livros do usuário conectado
    - GET /books/{id}: Detalhes do livro
    - PATCH /books/shareable/{id}: Alterna compartilhamento (somente dono)
    - PATCH /books/archived/{id}: Alterna arquivamento (somente dono)
    - POST /books/borrow/{id}: Pega livro emprestado
    - PATCH /books/borrow/return/{id}: Devolve livro emprestado
    - PATCH /books/borrow/return/approve/{id}: Aprova devolução (somente dono)
    - POST /books/cover/{id}: Envia capa do livro (somente dono)

Status codes:
    - 200: Sucesso
    - 201: Criado com sucesso
    - 202: Capa recebida
    - 400: Erro de validação
    - 401: Não autenticado
    - 403: Operação não permitida
    - 404: Livro não encontrado
"""

from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile, status

from book_network.core.deps import BookServiceDep, CurrentUser
from book_network.schemas.base import IdResponse, MessageResponse, PaginatedResponse
from book_network.schemas.book import BookRequest, BookResponse, BorrowedBookResponse

router = APIRouter(prefix="/books", tags=["Books"])

PageParam = Annotated[int, Query(ge=1, description="Número da página")]
SizeParam = Annotated[int, Query(ge=1, le=100, description="Itens por página")]


# ==========================================
# Cadastro e consultas
# ==========================================

@router.post(
    "",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar livro",
    description="Cadastra um livro pertencente ao usuário conectado.",
)
async def save_book(
    data: BookRequest,
    service: BookServiceDep,
    current_user: CurrentUser,
) -> IdResponse:
    """
    Raises:
        400: Título, autor ou ISBN ausentes
    """
    book_id = await service.save(data, current_user)
    return IdResponse(id=book_id)


@router.get(
    "",
    response_model=PaginatedResponse[BookResponse],
    summary="Listar livros disponíveis",
    description="Livros compartilhados, não arquivados e de outros usuários.",
)
async def find_all_books(
    service: BookServiceDep,
    current_user: CurrentUser,
    page: PageParam = 1,
    size: SizeParam = 10,
) -> PaginatedResponse[BookResponse]:
    return await service.find_all_books(page, size, current_user)


@router.get(
    "/owner",
    response_model=PaginatedResponse[BookResponse],
    summary="Listar meus livros",
)
async def find_all_books_by_owner(
    service: BookServiceDep,
    current_user: CurrentUser,
    page: PageParam = 1,
    size: SizeParam = 10,
) -> PaginatedResponse[BookResponse]:
    return await service.find_all_books_by_owner(page, size, current_user)


@router.get(
    "/borrowed",
    response_model=PaginatedResponse[BorrowedBookResponse],
    summary="Listar livros que peguei emprestado",
)
async def find_all_borrowed_books(
    service: BookServiceDep,
    current_user: CurrentUser,
    page: PageParam = 1,
    size: SizeParam = 10,
) -> PaginatedResponse[BorrowedBookResponse]:
    return await service.find_all_borrowed_books(page, size, current_user)


@router.get(
    "/returned",
    response_model=PaginatedResponse[BorrowedBookResponse],
    summary="Listar empréstimos dos meus livros",
)
async def find_all_returned_books(
    service: BookServiceDep,
    current_user: CurrentUser,
    page: PageParam = 1,
    size: SizeParam = 10,
) -> PaginatedResponse[BorrowedBookResponse]:
    return await service.find_all_returned_books(page, size, current_user)


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Detalhes do livro",
)
async def find_book_by_id(
    book_id: int,
    service: BookServiceDep,
    current_user: CurrentUser,
) -> BookResponse:
    """
    Raises:
        404: Livro não encontrado
    """
    return await service.find_by_id(book_id)


# ==========================================
# Status do livro
# ==========================================

@router.patch(
    "/shareable/{book_id}",
    response_model=IdResponse,
    summary="Alternar compartilhamento",
    description="Inverte o flag shareable. **Somente o dono.**",
)
async def update_shareable_status(
    book_id: int,
    service: BookServiceDep,
    current_user: CurrentUser,
) -> IdResponse:
    return IdResponse(id=await service.update_shareable_status(book_id, current_user))


@router.patch(
    "/archived/{book_id}",
    response_model=IdResponse,
    summary="Alternar arquivamento",
    description="Inverte o flag archived. **Somente o dono.**",
)
async def update_archived_status(
    book_id: int,
    service: BookServiceDep,
    current_user: CurrentUser,
) -> IdResponse:
    return IdResponse(id=await service.update_archived_status(book_id, current_user))


# ==========================================
# Empréstimos
# ==========================================

@router.post(
    "/borrow/{book_id}",
    response_model=IdResponse,
    summary="Pegar livro emprestado",
    description="Retorna o ID da transação de empréstimo.",
)
async def borrow_book(
    book_id: int,
    service: BookServiceDep,
    current_user: CurrentUser,
) -> IdResponse:
    """
    Raises:
        403: Livro arquivado, não compartilhado, próprio ou já emprestado
        404: Livro não encontrado
    """
    return IdResponse(id=await service.borrow_book(book_id, current_user))


@router.patch(
    "/borrow/return/{book_id}",
    response_model=IdResponse,
    summary="Devolver livro",
)
async def return_borrowed_book(
    book_id: int,
    service: BookServiceDep,
    current_user: CurrentUser,
) -> IdResponse:
    """
    Raises:
        403: Livro próprio, indisponível ou não emprestado pelo usuário
        404: Livro não encontrado
    """
    return IdResponse(id=await service.return_borrowed_book(book_id, current_user))


@router.patch(
    "/borrow/return/approve/{book_id}",
    response_model=IdResponse,
    summary="Aprovar devolução",
    description="Confirma o recebimento do livro devolvido. **Somente o dono.**",
)
async def approve_return_borrowed_book(
    book_id: int,
    service: BookServiceDep,
    current_user: CurrentUser,
) -> IdResponse:
    """
    Raises:
        403: Usuário não é o dono ou o livro ainda não foi devolvido
        404: Livro não encontrado
    """
    return IdResponse(id=await service.approve_return_borrowed_book(book_id, current_user))


# ==========================================
# Capa
# ==========================================

@router.post(
    "/cover/{book_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Enviar capa do livro",
)
async def upload_book_cover_picture(
    book_id: int,
    service: BookServiceDep,
    current_user: CurrentUser,
    file: UploadFile = File(...),
) -> MessageResponse:
    content = await file.read()
    await service.upload_book_cover_picture(book_id, content, file.filename, current_user)
    return MessageResponse(message="Capa recebida")
