"""
Módulo de banco de dados - conexões e sessões.

Exports:
    - Base: Classe base para modelos SQLAlchemy
    - engine: Engine async do SQLAlchemy
    - get_db: Dependency para injeção de sessão
"""

from book_network.db.session import Base, engine, get_db, async_session_factory

__all__ = [
    "Base",
    "engine",
    "get_db",
    "async_session_factory",
]
