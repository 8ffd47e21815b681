"""
Exceções de domínio e códigos de erro de negócio.

Services levantam estas exceções; o mapeamento para status HTTP e corpo
de resposta fica em book_network.core.handlers.
"""

import enum
from dataclasses import dataclass

from fastapi import status


class BusinessErrorCode(enum.Enum):
    """Códigos estáveis que distinguem falhas de negócio."""

    NO_CODE = (0, status.HTTP_501_NOT_IMPLEMENTED, "Sem código")
    INCORRECT_CURRENT_PASSWORD = (300, status.HTTP_400_BAD_REQUEST, "Senha atual incorreta")
    NEW_PASSWORD_DOES_NOT_MATCH = (301, status.HTTP_400_BAD_REQUEST, "A nova senha não confere")
    ACCOUNT_LOCKED = (302, status.HTTP_403_FORBIDDEN, "Conta de usuário bloqueada")
    ACCOUNT_DISABLED = (303, status.HTTP_403_FORBIDDEN, "Conta de usuário desativada")
    BAD_CREDENTIALS = (304, status.HTTP_403_FORBIDDEN, "Login e / ou senha incorretos")

    def __init__(self, code: int, http_status: int, description: str):
        self.code = code
        self.http_status = http_status
        self.description = description


@dataclass(frozen=True)
class FieldError:
    """Erro de validação de um campo."""
    field: str
    message: str


class BookNetworkError(Exception):
    """Erro base da aplicação."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationFailedError(BookNetworkError):
    """Um ou mais campos da requisição são inválidos."""

    def __init__(self, errors: list[FieldError]):
        super().__init__("Dados inválidos")
        self.errors = errors


# ==========================================
# Autenticação
# ==========================================

class AuthenticationFailedError(BookNetworkError):
    """Falha de autenticação com código de negócio associado."""

    error_code: BusinessErrorCode = BusinessErrorCode.NO_CODE

    def __init__(self, message: str | None = None):
        super().__init__(message or self.error_code.description)


class BadCredentialsError(AuthenticationFailedError):
    error_code = BusinessErrorCode.BAD_CREDENTIALS


class AccountLockedError(AuthenticationFailedError):
    error_code = BusinessErrorCode.ACCOUNT_LOCKED


class AccountDisabledError(AuthenticationFailedError):
    error_code = BusinessErrorCode.ACCOUNT_DISABLED


# ==========================================
# Ativação de conta
# ==========================================

class ActivationTokenError(BookNetworkError):
    """Código de ativação não pode ser usado."""


class InvalidActivationTokenError(ActivationTokenError):
    pass


class ActivationTokenExpiredError(ActivationTokenError):
    pass


# ==========================================
# Recursos e regras de negócio
# ==========================================

class EntityNotFoundError(BookNetworkError):
    pass


class OperationNotPermittedError(BookNetworkError):
    pass


class EmailDeliveryError(BookNetworkError):
    pass
