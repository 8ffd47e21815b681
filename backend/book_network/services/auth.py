"""
Service de autenticação: cadastro, ativação de conta e login.

Fluxo da conta:
    register -> usuário PENDING (enabled=False) + código de ativação por email
    activate_account -> usuário ACTIVE (enabled=True)
    authenticate -> JWT com fullName e authorities (status da conta
        verificado antes da senha)
"""

import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from book_network.core.config import Settings, get_settings
from book_network.core.exceptions import (
    AccountDisabledError,
    AccountLockedError,
    ActivationTokenExpiredError,
    BadCredentialsError,
    EmailDeliveryError,
    EntityNotFoundError,
    FieldError,
    InvalidActivationTokenError,
    ValidationFailedError,
)
from book_network.core.security import generate_token, hash_password, verify_password
from book_network.models.activation_token import ActivationToken
from book_network.models.base import utc_now
from book_network.models.user import User
from book_network.repositories.activation_token import ActivationTokenRepository
from book_network.repositories.role import RoleRepository
from book_network.repositories.user import UserRepository
from book_network.schemas.auth import (
    AuthenticationRequest,
    AuthenticationResponse,
    RegistrationRequest,
)
from book_network.schemas.validators import (
    ensure_valid,
    validate_authentication_request,
    validate_registration_request,
)
from book_network.services.mail import EmailService, EmailTemplateName

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "USER"
ACTIVATION_EMAIL_SUBJECT = "Ativação de conta"
EMAIL_TAKEN = "Email já cadastrado"


def generate_activation_code(length: int) -> str:
    """Gera código numérico com gerador criptograficamente seguro."""
    return "".join(secrets.choice(string.digits) for _ in range(length))


class AuthService:
    """Service para operações de autenticação."""

    def __init__(
        self,
        db: AsyncSession,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        token_repo: ActivationTokenRepository,
        email_service: EmailService,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.user_repo = user_repo
        self.role_repo = role_repo
        self.token_repo = token_repo
        self.email_service = email_service
        self.settings = settings or get_settings()
        self.clock = clock

    # ==========================================
    # Register
    # ==========================================

    async def register(self, data: RegistrationRequest) -> User:
        """
        Cadastra usuário desativado e envia o código de ativação.

        Com MAIL_FAILURE_POLICY="strict" uma falha no envio desfaz o
        cadastro; com "best_effort" o cadastro é confirmado e o envio
        ocorre em background.

        Raises:
            ValidationFailedError: Campos inválidos ou email já cadastrado
            RuntimeError: Role USER não inicializado (rodar o seed)
            EmailDeliveryError: Falha no envio com política "strict"
        """
        ensure_valid(validate_registration_request(data))

        if await self.user_repo.email_exists(data.email):
            raise ValidationFailedError([FieldError("email", EMAIL_TAKEN)])

        user_role = await self.role_repo.get_by_name(DEFAULT_ROLE)
        if user_role is None:
            raise RuntimeError(f"O role '{DEFAULT_ROLE}' não foi inicializado")

        try:
            user = await self.user_repo.create_user(
                firstname=data.firstname,
                lastname=data.lastname,
                email=data.email,
                password_hash=hash_password(data.password),
                roles=[user_role],
            )
        except IntegrityError:
            # Outro cadastro com o mesmo email entre a verificação e o insert
            await self.db.rollback()
            raise ValidationFailedError([FieldError("email", EMAIL_TAKEN)])
        logger.info(f"Usuário cadastrado: {user.email} (ID: {user.id})")

        await self._send_validation_email(user)
        return user

    async def _send_validation_email(self, user: User) -> None:
        """Gera e salva um novo código, confirma a transação e envia o email."""
        code = await self._generate_and_save_activation_token(user)
        email = dict(
            to=user.email,
            username=user.full_name,
            template=EmailTemplateName.ACTIVATE_ACCOUNT,
            confirmation_url=self.settings.ACTIVATION_URL,
            activation_code=code,
            subject=ACTIVATION_EMAIL_SUBJECT,
        )

        if self.settings.MAIL_FAILURE_POLICY == "strict":
            try:
                await self.email_service.send_email(**email)
            except EmailDeliveryError:
                await self.db.rollback()
                raise
            await self.db.commit()
        else:
            await self.db.commit()
            self.email_service.send_in_background(**email)

    async def _generate_and_save_activation_token(self, user: User) -> str:
        code = generate_activation_code(self.settings.ACTIVATION_CODE_LENGTH)
        while await self.token_repo.token_exists(code):
            code = generate_activation_code(self.settings.ACTIVATION_CODE_LENGTH)

        now = self.clock()
        await self.token_repo.create(
            token=code,
            created_at=now,
            expired_at=now + timedelta(minutes=self.settings.ACTIVATION_TOKEN_TTL_MINUTES),
            user=user,
        )
        return code

    # ==========================================
    # Activate
    # ==========================================

    async def activate_account(self, token: str) -> None:
        """
        Ativa a conta dona do código.

        Se o código expirou, um novo código é emitido e enviado ao
        mesmo usuário e a operação falha.

        Raises:
            InvalidActivationTokenError: Código inexistente ou já utilizado
            ActivationTokenExpiredError: Código expirado (novo código enviado)
        """
        saved_token: ActivationToken | None = await self.token_repo.get_by_token(token)
        if saved_token is None:
            raise InvalidActivationTokenError("Código de ativação inválido")

        if saved_token.is_validated:
            raise InvalidActivationTokenError("Código de ativação já utilizado")

        now = self.clock()
        if saved_token.is_expired(now):
            logger.info(f"Código expirado para usuário {saved_token.user_id}; emitindo novo")
            await self._send_validation_email(saved_token.user)
            raise ActivationTokenExpiredError(
                "O código de ativação expirou. Um novo código foi enviado para o mesmo email"
            )

        user = await self.user_repo.get_by_id(saved_token.user_id)
        if user is None:
            raise EntityNotFoundError("Usuário não encontrado")

        user.enabled = True
        saved_token.validated_at = now
        await self.db.commit()
        logger.info(f"Conta ativada: {user.email}")

    # ==========================================
    # Authenticate
    # ==========================================

    async def authenticate(self, data: AuthenticationRequest) -> AuthenticationResponse:
        """
        Valida credenciais e emite JWT.

        Raises:
            BadCredentialsError: Email inexistente ou senha incorreta
            AccountLockedError: Conta bloqueada
            AccountDisabledError: Conta ainda não ativada
        """
        ensure_valid(validate_authentication_request(data))

        user = await self.user_repo.get_by_email(data.email)
        if user is None:
            raise BadCredentialsError()

        if user.account_locked:
            raise AccountLockedError()

        if not user.enabled:
            raise AccountDisabledError()

        if not verify_password(data.password, user.password_hash):
            raise BadCredentialsError()

        return AuthenticationResponse(token=generate_token(user))
