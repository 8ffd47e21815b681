"""
Repository base com operações CRUD genéricas.

Repositories apenas adicionam e fazem flush; o commit é
responsabilidade do service que coordena a transação.
"""

from typing import Any, Generic, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.db.session import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Repository base com operações CRUD.

    Fornece métodos genéricos para:
    - get_by_id: Buscar por ID
    - create: Criar registro
    - save: Persistir instância nova ou alterada
    - paginate: Executar query paginada com total
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    async def get_by_id(self, id: int) -> ModelType | None:
        """Busca registro por ID."""
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> ModelType:
        """Cria novo registro."""
        instance = self.model(**kwargs)
        self.db.add(instance)
        await self.db.flush()
        return instance

    async def save(self, instance: ModelType) -> ModelType:
        """Persiste alterações de uma instância (nova ou existente)."""
        self.db.add(instance)
        await self.db.flush()
        return instance

    async def paginate(
        self,
        query: Select,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[ModelType], int]:
        """
        Executa query paginada, mais recentes primeiro.

        Returns:
            Tupla (registros da página, total)
        """
        skip = (page - 1) * page_size

        count_result = await self.db.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar_one()

        result = await self.db.execute(
            query
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(skip)
            .limit(page_size)
        )
        return list(result.scalars().all()), total
