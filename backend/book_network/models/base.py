"""
Mixins e utilitários comuns para models SQLAlchemy.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


def utc_now() -> datetime:
    """Data/hora atual em UTC, sem tzinfo (formato armazenado no banco)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class IdMixin:
    """Mixin que adiciona ID inteiro auto-incremental como primary key."""
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class TimestampMixin:
    """Mixin que adiciona timestamps de criação e atualização."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
        nullable=False,
    )


class AuditMixin:
    """Mixin com o ID do usuário que criou/alterou o registro por último."""
    created_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    last_modified_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
