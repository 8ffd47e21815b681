"""
Endpoints de autenticação (públicos).

Contratos:
    - POST /auth/register: Cadastra usuário desabilitado e envia código de ativação
    - POST /auth/authenticate: Retorna token JWT
    - GET /auth/activate-account?token=: Ativa a conta com o código recebido

Rate Limiting aplicado:
    - 10 req/min (rate_limit_auth) em todos os endpoints
"""

from fastapi import APIRouter, Depends, Query, status

from book_network.core.deps import AuthServiceDep
from book_network.core.rate_limit import rate_limit_auth
from book_network.schemas.auth import (
    AuthenticationRequest,
    AuthenticationResponse,
    RegistrationRequest,
)
from book_network.schemas.base import MessageResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Registrar novo usuário",
    description="Cria uma conta desabilitada e envia o código de ativação por email.",
)
async def register(
    data: RegistrationRequest,
    service: AuthServiceDep,
    _: None = Depends(rate_limit_auth),
) -> MessageResponse:
    """
    Registro público de usuário.

    - **firstname** / **lastname**: obrigatórios
    - **email**: único, formato válido
    - **password**: 8 a 64 caracteres

    Raises:
        400: Dados inválidos ou email já cadastrado
    """
    await service.register(data)
    return MessageResponse(message="Cadastro recebido. Verifique seu email para ativar a conta.")


@router.post(
    "/authenticate",
    response_model=AuthenticationResponse,
    summary="Autenticar usuário",
    description="Retorna token JWT para autenticação nos endpoints protegidos.",
)
async def authenticate(
    data: AuthenticationRequest,
    service: AuthServiceDep,
    _: None = Depends(rate_limit_auth),
) -> AuthenticationResponse:
    """
    Login de usuário.

    Uso: `Authorization: Bearer <token>`

    Raises:
        400: Dados inválidos
        403: Credenciais inválidas, conta bloqueada ou desabilitada
    """
    return await service.authenticate(data)


@router.get(
    "/activate-account",
    response_model=MessageResponse,
    summary="Ativar conta",
    description="Valida o código de ativação enviado por email.",
)
async def activate_account(
    service: AuthServiceDep,
    token: str = Query(..., description="Código de ativação"),
    _: None = Depends(rate_limit_auth),
) -> MessageResponse:
    """
    Ativa a conta do usuário.

    Um código expirado gera o envio de um novo código.

    Raises:
        400: Código inválido, já utilizado ou expirado
    """
    await service.activate_account(token)
    return MessageResponse(message="Conta ativada com sucesso")
