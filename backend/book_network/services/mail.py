"""
Service de envio de emails transacionais via SMTP.

O envio SMTP é bloqueante e roda em uma thread (asyncio.to_thread).
send_in_background agenda o envio sem aguardar o resultado; falhas
nesse modo são apenas registradas no log.
"""

import asyncio
import enum
import logging
import smtplib
from email.message import EmailMessage
from string import Template

from book_network.core.config import Settings, get_settings
from book_network.core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)


class EmailTemplateName(str, enum.Enum):
    """Templates de email disponíveis."""
    ACTIVATE_ACCOUNT = "activate_account"


TEMPLATES: dict[EmailTemplateName, Template] = {
    EmailTemplateName.ACTIVATE_ACCOUNT: Template(
        """<!DOCTYPE html>
<html lang="pt-BR">
<body>
  <p>Olá, $username!</p>
  <p>Sua conta foi criada. Use o código abaixo para ativá-la:</p>
  <h2>$activation_code</h2>
  <p>O código expira em alguns minutos. Ative sua conta em
     <a href="$confirmation_url">$confirmation_url</a>.</p>
</body>
</html>
"""
    ),
}


class EmailService:
    """Service para montagem e envio de emails."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._background_tasks: set[asyncio.Task] = set()

    def render(self, template: EmailTemplateName | None, **context: str) -> str:
        """Renderiza o template (ACTIVATE_ACCOUNT quando None)."""
        template = template or EmailTemplateName.ACTIVATE_ACCOUNT
        return TEMPLATES[template].safe_substitute(**context)

    def build_message(
        self,
        to: str,
        username: str,
        template: EmailTemplateName | None,
        confirmation_url: str,
        activation_code: str,
        subject: str,
    ) -> EmailMessage:
        html = self.render(
            template,
            username=username,
            confirmation_url=confirmation_url,
            activation_code=activation_code,
        )

        message = EmailMessage()
        message["From"] = self.settings.MAIL_FROM
        message["To"] = to
        message["Subject"] = subject
        message.set_content(
            f"Olá, {username}! Seu código de ativação é {activation_code}. "
            f"Ative sua conta em {confirmation_url}"
        )
        message.add_alternative(html, subtype="html")
        return message

    async def send_email(
        self,
        to: str,
        username: str,
        template: EmailTemplateName | None,
        confirmation_url: str,
        activation_code: str,
        subject: str,
    ) -> None:
        """
        Envia o email e aguarda a entrega ao servidor SMTP.

        Raises:
            EmailDeliveryError: Falha de conexão ou recusa do servidor SMTP
        """
        message = self.build_message(
            to, username, template, confirmation_url, activation_code, subject
        )
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Falha ao enviar email para {to}: {e}")
            raise EmailDeliveryError(f"Não foi possível enviar o email para {to}") from e

        logger.info(f"Email enviado com sucesso para {to}")

    def send_in_background(self, **kwargs) -> asyncio.Task:
        """Agenda send_email sem aguardar; mantém referência à task até terminar."""
        task = asyncio.create_task(self._send_logging_failures(**kwargs))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    async def wait_pending(self) -> None:
        """Aguarda os envios em background ainda pendentes."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)

    async def _send_logging_failures(self, **kwargs) -> None:
        try:
            await self.send_email(**kwargs)
        except EmailDeliveryError:
            logger.warning(f"Email para {kwargs.get('to')} não entregue (envio em background)")

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.MAIL_HOST,
            self.settings.MAIL_PORT,
            timeout=self.settings.MAIL_TIMEOUT_SECONDS,
        ) as smtp:
            if self.settings.MAIL_USE_TLS:
                smtp.starttls()
            if self.settings.MAIL_USERNAME:
                smtp.login(self.settings.MAIL_USERNAME, self.settings.MAIL_PASSWORD or "")
            smtp.send_message(message)
