"""
Schemas Pydantic para autenticação e cadastro.

Os campos são strings simples; as regras de validação ficam em
book_network.schemas.validators para produzir mensagens por campo.
"""

from pydantic import Field

from book_network.schemas.base import BaseSchema


class RegistrationRequest(BaseSchema):
    """Dados de cadastro de um novo usuário."""
    firstname: str = Field("", examples=["Ana"])
    lastname: str = Field("", examples=["Souza"])
    email: str = Field("", examples=["ana@example.com"])
    password: str = Field("", examples=["Senha123!"])


class AuthenticationRequest(BaseSchema):
    """Credenciais de login."""
    email: str = Field("", examples=["ana@example.com"])
    password: str = Field("", examples=["Senha123!"])


class AuthenticationResponse(BaseSchema):
    """Resposta de autenticação com token JWT."""
    token: str
