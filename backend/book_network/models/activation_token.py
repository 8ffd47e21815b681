"""
Model do código de ativação de conta.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from book_network.db.session import Base
from book_network.models.base import IdMixin, utc_now

if TYPE_CHECKING:
    from book_network.models.user import User


class ActivationToken(Base, IdMixin):
    """
    Código numérico enviado por email para ativar a conta.

    Regras:
        - Usável uma única vez (validated_at nulo)
        - Usável apenas antes de expired_at

    Attributes:
        token: Código numérico (6 dígitos por padrão)
        created_at: Data/hora de emissão
        expired_at: created_at + TTL (15 minutos por padrão)
        validated_at: Data/hora em que foi usado
        user_id: FK para o dono do código
    """
    __tablename__ = "activation_tokens"

    token: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    expired_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    validated_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship("User", lazy="selectin")

    def is_expired(self, now: datetime) -> bool:
        return now > self.expired_at

    @property
    def is_validated(self) -> bool:
        return self.validated_at is not None

    def __repr__(self) -> str:
        return f"<ActivationToken user={self.user_id} expires={self.expired_at}>"
