"""
Validação explícita das requisições.

Cada função recebe o schema da requisição e retorna a lista de
erros por campo (vazia quando válido).
"""

from email_validator import EmailNotValidError, validate_email

from book_network.core.exceptions import FieldError, ValidationFailedError
from book_network.schemas.auth import AuthenticationRequest, RegistrationRequest
from book_network.schemas.book import BookRequest

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 64


def _required(errors: list[FieldError], field: str, value: str, label: str) -> bool:
    if not value or not value.strip():
        errors.append(FieldError(field, f"{label} é obrigatório"))
        return False
    return True


def _check_email(errors: list[FieldError], value: str) -> None:
    if not _required(errors, "email", value, "Email"):
        return
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        errors.append(FieldError("email", "Email em formato inválido"))


def validate_registration_request(data: RegistrationRequest) -> list[FieldError]:
    errors: list[FieldError] = []
    _required(errors, "firstname", data.firstname, "Nome")
    _required(errors, "lastname", data.lastname, "Sobrenome")
    _check_email(errors, data.email)

    if _required(errors, "password", data.password, "Senha"):
        if len(data.password) < PASSWORD_MIN_LENGTH:
            errors.append(FieldError(
                "password",
                f"Senha deve ter no mínimo {PASSWORD_MIN_LENGTH} caracteres",
            ))
        elif len(data.password) > PASSWORD_MAX_LENGTH:
            errors.append(FieldError(
                "password",
                f"Senha deve ter no máximo {PASSWORD_MAX_LENGTH} caracteres",
            ))
    return errors


def validate_authentication_request(data: AuthenticationRequest) -> list[FieldError]:
    errors: list[FieldError] = []
    _check_email(errors, data.email)
    _required(errors, "password", data.password, "Senha")
    return errors


def validate_book_request(data: BookRequest) -> list[FieldError]:
    errors: list[FieldError] = []
    _required(errors, "title", data.title, "Título")
    _required(errors, "author_name", data.author_name, "Nome do autor")
    _required(errors, "isbn", data.isbn, "ISBN")
    _required(errors, "synopsis", data.synopsis, "Sinopse")
    return errors


def ensure_valid(errors: list[FieldError]) -> None:
    """Levanta ValidationFailedError se houver erros."""
    if errors:
        raise ValidationFailedError(errors)
