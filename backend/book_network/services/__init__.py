"""
Módulo de serviços - lógica de negócio.
"""

from book_network.services.auth import AuthService
from book_network.services.book import BookService
from book_network.services.file_storage import FileStorageService
from book_network.services.mail import EmailService, EmailTemplateName

__all__ = [
    "AuthService",
    "BookService",
    "EmailService",
    "EmailTemplateName",
    "FileStorageService",
]
