"""
Filtro JWT executado em todo request da API.

Extrai o bearer token, carrega o usuário do subject (email) e, se o
token for válido e nenhuma identidade estiver associada ao request,
associa o usuário a request.state.user. Falhas são silenciosas: o
request segue sem identidade e a exigência de autenticação fica com
a dependency CurrentUser.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.core.security import extract_username, is_token_valid
from book_network.db.session import get_db
from book_network.models.user import User
from book_network.repositories.user import UserRepository

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class JwtFilter:
    """
    Dependency que popula a identidade do request a partir do JWT.

    Args:
        excluded_prefix: Rotas com este prefixo não são autenticadas
    """

    def __init__(self, excluded_prefix: str = "/api/v1/auth"):
        self.excluded_prefix = excluded_prefix

    async def __call__(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db),
    ) -> Optional[User]:
        bound_user: Optional[User] = getattr(request.state, "user", None)

        if request.url.path.startswith(self.excluded_prefix):
            return bound_user

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith(BEARER_PREFIX):
            return bound_user

        jwt = auth_header[len(BEARER_PREFIX):]
        user_email = extract_username(jwt)

        if user_email is not None and bound_user is None:
            user = await UserRepository(db).get_by_email(user_email)
            if user is not None and is_token_valid(jwt, user):
                request.state.user = user
                return user
            logger.debug(f"Token rejeitado para {user_email}")

        return bound_user


jwt_filter = JwtFilter()
