"""
Testes unitários para envio de email e armazenamento de arquivos.
"""

import smtplib
from unittest.mock import patch

import pytest

from book_network.core.config import Settings
from book_network.core.exceptions import EmailDeliveryError
from book_network.services.file_storage import (
    FileStorageService,
    get_file_extension,
    read_file_from_location,
)
from book_network.services.mail import EmailService, EmailTemplateName

EMAIL = dict(
    to="ana@example.com",
    username="Ana Souza",
    template=EmailTemplateName.ACTIVATE_ACCOUNT,
    confirmation_url="http://localhost:4200/activate-account",
    activation_code="123456",
    subject="Ativação de conta",
)


@pytest.fixture
def email_service():
    return EmailService(Settings(MAIL_FROM="noreply@booknetwork.local"))


class TestEmailService:

    def test_build_message(self, email_service):
        message = email_service.build_message(**EMAIL)

        assert message["To"] == "ana@example.com"
        assert message["From"] == "noreply@booknetwork.local"
        assert message["Subject"] == "Ativação de conta"
        html = message.get_body(preferencelist=("html",)).get_content()
        assert "123456" in html
        assert "Ana Souza" in html
        assert "http://localhost:4200/activate-account" in html

    def test_render_defaults_to_activation_template(self, email_service):
        html = email_service.render(
            None, username="Ana", confirmation_url="http://x", activation_code="654321"
        )

        assert "654321" in html

    @pytest.mark.anyio
    async def test_send_email_delivers_message(self, email_service):
        with patch.object(email_service, "_deliver") as mock_deliver:
            await email_service.send_email(**EMAIL)

        message = mock_deliver.call_args[0][0]
        assert message["To"] == "ana@example.com"

    @pytest.mark.anyio
    async def test_send_email_failure_raises(self, email_service):
        with patch.object(
            email_service, "_deliver", side_effect=smtplib.SMTPException("recusado")
        ):
            with pytest.raises(EmailDeliveryError):
                await email_service.send_email(**EMAIL)

    @pytest.mark.anyio
    async def test_background_failure_is_only_logged(self, email_service):
        with patch.object(email_service, "_deliver", side_effect=OSError("sem conexão")):
            task = email_service.send_in_background(**EMAIL)
            await email_service.wait_pending()

        assert task.done()
        assert task.exception() is None


class TestFileStorage:

    @pytest.mark.parametrize(
        "filename,expected",
        [("capa.PNG", "png"), ("arquivo.tar.gz", "gz"), ("sem_extensao", ""), (None, "")],
    )
    def test_get_file_extension(self, filename, expected):
        assert get_file_extension(filename) == expected

    def test_save_and_read_file(self, tmp_path):
        storage = FileStorageService(str(tmp_path))

        path = storage.save_file(b"conteudo", "capa.jpg", user_id=3)

        assert path.startswith(str(tmp_path / "users" / "3"))
        assert path.endswith(".jpg")
        assert storage.read_file(path) == b"conteudo"

    def test_read_missing_file(self, tmp_path):
        assert read_file_from_location(str(tmp_path / "nao-existe.png")) is None
        assert read_file_from_location(None) is None
        assert read_file_from_location("  ") is None
