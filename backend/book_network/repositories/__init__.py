"""
Repositories - acesso a dados por agregado.
"""

from book_network.repositories.activation_token import ActivationTokenRepository
from book_network.repositories.book import BookRepository
from book_network.repositories.history import BookTransactionHistoryRepository
from book_network.repositories.role import RoleRepository
from book_network.repositories.user import UserRepository

__all__ = [
    "ActivationTokenRepository",
    "BookRepository",
    "BookTransactionHistoryRepository",
    "RoleRepository",
    "UserRepository",
]
