"""
Testes unitários para funções de segurança.
"""

from datetime import datetime, timedelta, timezone

from book_network.core.security import (
    create_access_token,
    decode_token,
    extract_username,
    generate_token,
    hash_password,
    is_token_valid,
    verify_password,
)
from book_network.models.user import Role, User


def make_user(email: str = "ana@example.com") -> User:
    return User(
        id=1,
        firstname="Ana",
        lastname="Souza",
        email=email,
        password_hash="hash",
        enabled=True,
        account_locked=False,
        roles=[Role(id=1, name="USER")],
    )


class TestPasswordHashing:
    """Testes para hash de senha."""

    def test_hash_password_returns_hash(self):
        """Hash deve ser diferente da senha original."""
        password = "MinhaSenh@123"
        hashed = hash_password(password)

        assert hashed != password
        assert len(hashed) > 50  # bcrypt hash tem ~60 caracteres

    def test_hash_password_different_hashes(self):
        """Mesmo password deve gerar hashes diferentes (salt)."""
        password = "MinhaSenh@123"

        assert hash_password(password) != hash_password(password)

    def test_verify_password(self):
        hashed = hash_password("MinhaSenh@123")

        assert verify_password("MinhaSenh@123", hashed) is True
        assert verify_password("SenhaErrada123", hashed) is False
        assert verify_password("", hashed) is False

    def test_verify_password_invalid_hash(self):
        """Hash corrompido não deve levantar exceção."""
        assert verify_password("MinhaSenh@123", "nao-e-um-hash") is False


class TestJWT:
    """Testes para JWT."""

    def test_generate_token_claims(self):
        """Token carrega email, nome completo e roles."""
        token = generate_token(make_user())
        payload = decode_token(token)

        assert payload["sub"] == "ana@example.com"
        assert payload["fullName"] == "Ana Souza"
        assert payload["authorities"] == ["USER"]
        assert payload["exp"] > payload["iat"]

    def test_generate_token_extra_claims(self):
        payload = decode_token(generate_token(make_user(), extra_claims={"tenant": "x"}))

        assert payload["tenant"] == "x"
        assert payload["authorities"] == ["USER"]

    def test_extract_username(self):
        token = generate_token(make_user())

        assert extract_username(token) == "ana@example.com"

    def test_token_valid_for_owner(self):
        user = make_user()
        token = generate_token(user)

        assert is_token_valid(token, user) is True

    def test_token_invalid_for_other_user(self):
        token = generate_token(make_user())

        assert is_token_valid(token, make_user("bruno@example.com")) is False

    def test_token_invalid_after_expiration(self):
        """Avançar o relógio além da expiração invalida o token."""
        user = make_user()
        token = generate_token(user, expires_delta=timedelta(minutes=5))
        now = datetime.now(timezone.utc)

        assert is_token_valid(token, user, now=now + timedelta(minutes=4)) is True
        assert is_token_valid(token, user, now=now + timedelta(minutes=6)) is False

    def test_expired_token_is_rejected(self):
        token = create_access_token(subject="ana@example.com", expires_delta=timedelta(seconds=-10))

        assert decode_token(token) is None
        assert extract_username(token) is None
        assert decode_token(token, verify_exp=False)["sub"] == "ana@example.com"

    def test_tampered_token_is_rejected(self):
        user = make_user()
        token = generate_token(user)
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[:-4]}AAAA"

        assert decode_token(tampered) is None
        assert is_token_valid(tampered, user) is False

    def test_garbage_token_is_rejected(self):
        assert decode_token("invalid.token.here") is None
        assert decode_token("") is None
