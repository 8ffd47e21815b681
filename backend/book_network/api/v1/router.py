"""
Router principal da API v1.

Inclui todos os routers de endpoints. O filtro JWT roda em todas as
rotas; as rotas /auth não são autenticadas.
"""

from fastapi import APIRouter, Depends

from book_network.api.v1.auth import router as auth_router
from book_network.api.v1.books import router as books_router
from book_network.core.auth_filter import jwt_filter

api_router = APIRouter(prefix="/api/v1", dependencies=[Depends(jwt_filter)])

api_router.include_router(auth_router)
api_router.include_router(books_router)
