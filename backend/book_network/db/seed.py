"""
Script de seed para criar dados iniciais no banco.

Uso:
    python -m book_network.db.seed

Cria os roles USER e ADMIN. O role USER é pré-requisito do cadastro.
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from book_network.db.session import async_session_factory
from book_network.repositories.role import RoleRepository

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ("USER", "ADMIN")


async def create_roles(db: AsyncSession) -> list[str]:
    """
    Cria os roles padrão que ainda não existem.

    Returns:
        Nomes dos roles criados
    """
    repo = RoleRepository(db)
    created = []

    for name in DEFAULT_ROLES:
        if await repo.get_by_name(name):
            logger.info(f"Role já existe: {name}")
            continue
        await repo.create(name=name)
        created.append(name)
        logger.info(f"Role criado: {name}")

    await db.commit()
    return created


async def main() -> None:
    """Executa todos os seeds."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    logger.info("Executando seeds...")
    async with async_session_factory() as db:
        await create_roles(db)
    logger.info("Seeds concluídos!")


if __name__ == "__main__":
    asyncio.run(main())
