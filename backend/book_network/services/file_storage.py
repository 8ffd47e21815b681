"""
Armazenamento local de arquivos enviados (capas de livros).
"""

import logging
import time
from pathlib import Path

logger = logging.getLogger(__name__)


def get_file_extension(filename: str | None) -> str:
    """Extensão em minúsculas, ou "" se o nome não tiver ponto."""
    if not filename:
        return ""
    _, dot, extension = filename.rpartition(".")
    if not dot:
        return ""
    return extension.lower()


def read_file_from_location(file_url: str | None) -> bytes | None:
    """Lê o arquivo salvo; retorna None se o caminho estiver vazio ou não existir."""
    if not file_url or not file_url.strip():
        return None
    try:
        return Path(file_url).read_bytes()
    except OSError:
        logger.warning(f"Nenhum arquivo encontrado em {file_url}")
        return None


class FileStorageService:
    """Salva arquivos em <uploads_dir>/users/<user_id>/<timestamp>.<ext>."""

    def __init__(self, uploads_dir: str):
        self.uploads_dir = Path(uploads_dir)

    def save_file(self, content: bytes, filename: str | None, user_id: int) -> str:
        """
        Grava o arquivo enviado por um usuário.

        Returns:
            Caminho do arquivo gravado
        """
        target_folder = self.uploads_dir / "users" / str(user_id)
        target_folder.mkdir(parents=True, exist_ok=True)

        extension = get_file_extension(filename)
        name = str(int(time.time() * 1000))
        if extension:
            name = f"{name}.{extension}"

        target_path = target_folder / name
        try:
            target_path.write_bytes(content)
        except OSError:
            logger.exception(f"Arquivo não foi salvo: {target_path}")
            raise

        logger.info(f"Arquivo salvo em: {target_path}")
        return str(target_path)

    def read_file(self, file_url: str | None) -> bytes | None:
        return read_file_from_location(file_url)
