from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from clinicdesk.features.auth.models import User
from clinicdesk.features.users.service import UserService
from clinicdesk.core.security import decode_token
from clinicdesk.core.logging import logger
from clinicdesk.shared.exceptions import CredentialsException, ForbiddenException, NotFoundException


# HTTP Bearer security scheme; a missing header is reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> User:
    """
    Dependency to get current authenticated user.

    The user id comes from the token only; ids in request bodies or paths
    are never used to decide ownership.

    Raises:
        CredentialsException: If credentials are missing, invalid or expired,
            or the account is unknown or inactive
    """
    if credentials is None:
        raise CredentialsException("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise CredentialsException("Invalid authentication credentials")

    user_id: Optional[str] = payload.get("sub")
    if user_id is None:
        raise CredentialsException("Invalid authentication credentials")

    try:
        user = await UserService.get_user_by_id(user_id)
    except NotFoundException:
        logger.warning(f"Token for unknown user {user_id}")
        raise CredentialsException("Invalid token")

    if not user.is_active:
        logger.warning(f"Inactive user {user_id} attempted access")
        raise CredentialsException("Invalid token")

    return user


async def get_current_doctor_id(
    current_user: User = Depends(get_current_user)
) -> str:
    """Dependency returning the id every tenant-scoped operation filters on."""
    return str(current_user.id)


async def require_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to restrict an endpoint to admins.

    Raises:
        ForbiddenException: If the user is not an admin
    """
    if current_user.role != "admin":
        raise ForbiddenException("Admin role required")
    return current_user
