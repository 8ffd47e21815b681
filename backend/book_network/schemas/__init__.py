"""
Schemas Pydantic da aplicação.
"""

from book_network.schemas.base import (
    BaseSchema,
    ExceptionResponse,
    IdResponse,
    MessageResponse,
    PaginatedResponse,
)
from book_network.schemas.health import HealthResponse
from book_network.schemas.auth import (
    AuthenticationRequest,
    AuthenticationResponse,
    RegistrationRequest,
)
from book_network.schemas.book import (
    BookRequest,
    BookResponse,
    BorrowedBookResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "ExceptionResponse",
    "IdResponse",
    "MessageResponse",
    "PaginatedResponse",
    # Health
    "HealthResponse",
    # Auth
    "AuthenticationRequest",
    "AuthenticationResponse",
    "RegistrationRequest",
    # Book
    "BookRequest",
    "BookResponse",
    "BorrowedBookResponse",
]
