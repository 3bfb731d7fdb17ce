"""Request-scoped dependencies shared by the routers"""

from typing import Optional
from fastapi import Depends, Header
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.membership_repository import SqlAlchemyMembershipRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.services.auth_provider import SqlAlchemyAuthProvider
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.secret_cipher import FernetSecretCipher
from src.api.error import ClientError
from src.app import errors
from src.app.repositories.storage_scope import StorageScope
from src.app.services.notification_service import NotificationService
from src.app.services.secret_cipher import SecretCipher
from src.app.use_cases.access import AuthorizeAccess, ResolvePrincipal
from src.depends import get_session
from src.domain.access import Principal

BEARER = "bearer"


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != BEARER or not token.strip():
        return None
    return token.strip()


async def get_principal(
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> Principal:
    """
    Resolve the caller from ``Authorization: Bearer <token>``

    The principal is rebuilt from the user row on every request.
    """
    token = parse_bearer(authorization)
    if token is None:
        raise ClientError(errors.unauthorized("Missing bearer token"))

    identity = await SqlAlchemyAuthProvider(session).get_identity(token)

    use_case = ResolvePrincipal(
        scoped_user_repo=SqlAlchemyUserRepository(
            session,
            scope=StorageScope.SCOPED,
            organization_id=identity.organization_id if identity else None,
        ),
        privileged_user_repo=SqlAlchemyUserRepository(session, scope=StorageScope.PRIVILEGED),
    )
    result = await use_case.execute(identity)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


def build_authorizer(session: AsyncSession) -> AuthorizeAccess:
    return AuthorizeAccess(SqlAlchemyMembershipRepository(session))


def get_notification_service() -> NotificationService:
    return create_notification_service(ApplicationConfig.NOTIFICATION_WEBHOOK_URL)


def get_secret_cipher() -> SecretCipher:
    return FernetSecretCipher(ApplicationConfig.API_KEY_ENCRYPTION_KEY)
