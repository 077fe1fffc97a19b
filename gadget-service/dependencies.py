# dependencies.py
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth_service import AuthService
from codenames import CodenameGenerator, default_generator
from database import get_db
from errors import AuthenticationRequired, InsufficientPermissions, MissingToken
from gadget_service import GadgetService
from schemas import CurrentUser

# auto_error is off so that a missing header maps to MISSING_TOKEN
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_codename_generator() -> CodenameGenerator:
    return default_generator


def get_gadget_service(
    db: AsyncSession = Depends(get_db),
    generator: CodenameGenerator = Depends(get_codename_generator),
) -> GadgetService:
    return GadgetService(db, generator)


async def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUser:
    """
    Resolves the bearer token to the user it was issued for and attaches
    that user to request.state for downstream handlers.
    """
    if not token:
        raise MissingToken()
    user = await auth_service.resolve_token(token)
    request.state.user = user
    return user


def check_role(user: Optional[CurrentUser], allowed_roles) -> CurrentUser:
    if user is None:
        raise AuthenticationRequired()
    if user.role not in allowed_roles:
        raise InsufficientPermissions(required=list(allowed_roles), current=user.role)
    return user


def require_role(*allowed_roles: str) -> Callable:
    """
    Use as Depends(require_role("admin")).
    """

    async def _wrapper(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        return check_role(user, allowed_roles)

    return _wrapper
