"""
Mapeamento das exceções de domínio para respostas HTTP.

Todas as respostas de erro usam o envelope ExceptionResponse.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from book_network.core.exceptions import (
    ActivationTokenError,
    AuthenticationFailedError,
    EmailDeliveryError,
    EntityNotFoundError,
    OperationNotPermittedError,
    ValidationFailedError,
)
from book_network.schemas.base import ExceptionResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DESCRIPTION = "Erro interno, contate o administrador"


def _response(status_code: int, body: ExceptionResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_content())


async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors:
        errors.setdefault(error.field, error.message)

    return _response(
        status.HTTP_400_BAD_REQUEST,
        ExceptionResponse(
            validation_errors=sorted({error.message for error in exc.errors}),
            errors=errors,
        ),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = set()
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.add(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))

    return _response(
        status.HTTP_400_BAD_REQUEST,
        ExceptionResponse(validation_errors=sorted(messages)),
    )


async def authentication_failed_handler(
    request: Request,
    exc: AuthenticationFailedError,
) -> JSONResponse:
    code = exc.error_code
    return _response(
        code.http_status,
        ExceptionResponse(
            business_error_code=code.code,
            business_error_description=code.description,
            error=exc.message,
        ),
    )


async def activation_token_handler(request: Request, exc: ActivationTokenError) -> JSONResponse:
    return _response(status.HTTP_400_BAD_REQUEST, ExceptionResponse(error=exc.message))


async def entity_not_found_handler(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    return _response(status.HTTP_404_NOT_FOUND, ExceptionResponse(error=exc.message))


async def operation_not_permitted_handler(
    request: Request,
    exc: OperationNotPermittedError,
) -> JSONResponse:
    return _response(status.HTTP_403_FORBIDDEN, ExceptionResponse(error=exc.message))


async def email_delivery_handler(request: Request, exc: EmailDeliveryError) -> JSONResponse:
    return _response(status.HTTP_500_INTERNAL_SERVER_ERROR, ExceptionResponse(error=exc.message))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}")
    return _response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ExceptionResponse(business_error_description=INTERNAL_ERROR_DESCRIPTION),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registra os handlers de exceção na aplicação."""
    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AuthenticationFailedError, authentication_failed_handler)
    app.add_exception_handler(ActivationTokenError, activation_token_handler)
    app.add_exception_handler(EntityNotFoundError, entity_not_found_handler)
    app.add_exception_handler(OperationNotPermittedError, operation_not_permitted_handler)
    app.add_exception_handler(EmailDeliveryError, email_delivery_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
