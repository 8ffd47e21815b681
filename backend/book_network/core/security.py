"""
Utilitários de segurança: hash de senha e JWT.

Os tokens são assinados com HMAC usando a chave obtida ao decodificar
JWT_SECRET (base64). O subject do token é o email do usuário.
"""

import base64
import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import bcrypt
from jose import JWTError, jwt

from book_network.core.config import get_settings

if TYPE_CHECKING:
    from book_network.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()


def hash_password(password: str) -> str:
    """
    Gera hash bcrypt da senha.

    Args:
        password: Senha em texto plano

    Returns:
        Hash bcrypt da senha
    """
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica se a senha corresponde ao hash.

    Returns:
        True se a senha está correta
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except Exception as e:
        logger.debug(f"Erro na verificação de senha: {type(e).__name__}")
        return False


def get_signing_key() -> bytes:
    """Decodifica a chave HMAC a partir do segredo em base64."""
    return base64.b64decode(settings.JWT_SECRET)


def create_access_token(
    subject: str,
    extra_data: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Cria token JWT.

    Args:
        subject: Identificador do usuário (email)
        extra_data: Claims adicionais para incluir no payload
        expires_delta: Tempo de expiração customizado

    Returns:
        Token JWT assinado
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.JWT_EXPIRES_MINUTES)

    payload: dict[str, Any] = {}
    if extra_data:
        payload.update(extra_data)

    payload.update({
        "sub": subject,
        "iat": now,
        "exp": expire,
    })

    return jwt.encode(payload, get_signing_key(), algorithm=settings.JWT_ALGORITHM)


def generate_token(
    user: "User",
    extra_claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Emite o JWT de um usuário autenticado.

    Claims:
        sub: email do usuário
        authorities: nomes dos roles
        fullName: nome completo
    """
    claims: dict[str, Any] = {"fullName": user.full_name}
    if extra_claims:
        claims.update(extra_claims)
    claims["authorities"] = [role.name for role in user.roles]

    return create_access_token(
        subject=user.email,
        extra_data=claims,
        expires_delta=expires_delta,
    )


def decode_token(token: str, verify_exp: bool = True) -> dict[str, Any] | None:
    """
    Decodifica e valida token JWT.

    Args:
        token: Token JWT
        verify_exp: Se False, aceita token expirado (assinatura ainda é validada)

    Returns:
        Payload do token ou None se inválido/expirado
    """
    try:
        return jwt.decode(
            token,
            get_signing_key(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_exp": verify_exp},
        )
    except JWTError:
        return None


def extract_username(token: str) -> str | None:
    """Retorna o subject (email) de um token válido, ou None."""
    payload = decode_token(token)
    if payload is None:
        return None
    return payload.get("sub")


def is_token_valid(
    token: str,
    user: "User",
    now: datetime | None = None,
) -> bool:
    """
    Verifica se o token pertence ao usuário e ainda não expirou.

    valid = (subject == user.email) AND (now < expiração)
    """
    payload = decode_token(token, verify_exp=False)
    if payload is None:
        return False

    exp = payload.get("exp")
    if payload.get("sub") != user.email or exp is None:
        return False

    now = now or datetime.now(timezone.utc)
    return now < datetime.fromtimestamp(exp, tz=timezone.utc)
