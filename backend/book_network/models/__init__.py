"""
Models SQLAlchemy da aplicação.

Importar todos os models aqui para que o Alembic detecte as mudanças.
"""

from book_network.models.user import Role, User, user_roles
from book_network.models.activation_token import ActivationToken
from book_network.models.book import Book
from book_network.models.history import BookTransactionHistory

__all__ = [
    "Role",
    "User",
    "user_roles",
    "ActivationToken",
    "Book",
    "BookTransactionHistory",
]
