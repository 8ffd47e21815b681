"""
Schemas base reutilizáveis em toda a aplicação.
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Schema base com configurações padrão."""
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
    )


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Resposta paginada genérica (páginas começam em 1).

    Uso nos endpoints:
        @app.get("/books", response_model=PaginatedResponse[BookResponse])
        async def list_books(...) -> PaginatedResponse[BookResponse]:
            ...
    """
    items: List[T]
    total: int
    page: int
    page_size: int
    pages: int
    first: bool
    last: bool

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def create(
        cls,
        items: List[T],
        total: int,
        page: int,
        page_size: int,
    ) -> "PaginatedResponse[T]":
        """Factory method para criar resposta paginada."""
        pages = (total + page_size - 1) // page_size if page_size > 0 else 0
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            pages=pages,
            first=page <= 1,
            last=page >= pages,
        )


class ExceptionResponse(BaseModel):
    """
    Envelope JSON de erro.

    Campos vazios são omitidos na serialização (ver to_content).
    """
    business_error_code: Optional[int] = Field(None, serialization_alias="businessErrorCode")
    business_error_description: Optional[str] = Field(
        None, serialization_alias="businessErrorDescription"
    )
    error: Optional[str] = None
    validation_errors: Optional[List[str]] = Field(None, serialization_alias="validationErrors")
    errors: Optional[dict[str, str]] = None

    def to_content(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class IdResponse(BaseModel):
    """Resposta com o ID do recurso afetado."""
    id: int


class MessageResponse(BaseModel):
    """Resposta simples com mensagem."""
    message: str
