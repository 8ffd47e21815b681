"""
Models de usuário e roles.
"""

from typing import List

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from book_network.db.session import Base
from book_network.models.base import IdMixin, TimestampMixin

# Associação N:N entre usuários e roles
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base, IdMixin, TimestampMixin):
    """
    Role de acesso (dado de referência, ex: "USER").

    Criado pelo seed; o cadastro falha se "USER" não existir.
    """
    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Role {self.name}>"


class User(Base, IdMixin, TimestampMixin):
    """
    Usuário da rede de livros.

    Ciclo de vida:
        PENDING (enabled=False) -> ACTIVE (enabled=True) após ativação
        com um código válido.

    Attributes:
        firstname: Primeiro nome
        lastname: Sobrenome
        email: Email único (usado como login e subject do JWT)
        password_hash: Hash bcrypt da senha
        enabled: Conta ativada
        account_locked: Conta bloqueada
        roles: Roles do usuário (authorities do JWT)
    """
    __tablename__ = "users"

    firstname: Mapped[str] = mapped_column(String(100), nullable=False)
    lastname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    account_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    roles: Mapped[List["Role"]] = relationship(
        "Role",
        secondary=user_roles,
        lazy="selectin",
    )

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"

    def __repr__(self) -> str:
        return f"<User {self.email}>"
