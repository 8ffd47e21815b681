"""
Dependencies FastAPI: autenticação e composição dos services.

Este módulo é a raiz de composição: monta repositories e services a
partir da sessão do request e das configurações.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.core.auth_filter import jwt_filter
from book_network.core.config import get_settings
from book_network.db.session import get_db
from book_network.models.user import User
from book_network.repositories.activation_token import ActivationTokenRepository
from book_network.repositories.book import BookRepository
from book_network.repositories.history import BookTransactionHistoryRepository
from book_network.repositories.role import RoleRepository
from book_network.repositories.user import UserRepository
from book_network.services.auth import AuthService
from book_network.services.book import BookService
from book_network.services.file_storage import FileStorageService
from book_network.services.mail import EmailService

DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_user(
    user: Annotated[Optional[User], Depends(jwt_filter)],
) -> User:
    """
    Dependency que exige um usuário autenticado pelo filtro JWT.

    Raises:
        HTTPException 401: Token ausente, inválido ou expirado
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido ou expirado",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@lru_cache
def get_email_service() -> EmailService:
    """EmailService único por processo (acompanha envios em background)."""
    return EmailService(get_settings())


def get_file_storage() -> FileStorageService:
    return FileStorageService(get_settings().UPLOADS_DIR)


def get_auth_service(
    db: DbSession,
    email_service: Annotated[EmailService, Depends(get_email_service)],
) -> AuthService:
    return AuthService(
        db=db,
        user_repo=UserRepository(db),
        role_repo=RoleRepository(db),
        token_repo=ActivationTokenRepository(db),
        email_service=email_service,
        settings=get_settings(),
    )


def get_book_service(
    db: DbSession,
    file_storage: Annotated[FileStorageService, Depends(get_file_storage)],
) -> BookService:
    return BookService(
        db=db,
        book_repo=BookRepository(db),
        history_repo=BookTransactionHistoryRepository(db),
        file_storage=file_storage,
    )


# Type aliases para uso nos endpoints
CurrentUser = Annotated[User, Depends(get_current_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
