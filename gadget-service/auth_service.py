# auth_service.py
import logging
from typing import Optional, Tuple

from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from starlette.concurrency import run_in_threadpool

from errors import (
    InvalidCredentials,
    InvalidToken,
    MissingCredentials,
    UserExists,
    UserNotFound,
    WeakPassword,
)
from models import UserDB, UserRole
from schemas import CurrentUser
from security import create_access_token, decode_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def issue_token(user: UserDB) -> str:
    return create_access_token(
        data={"userId": user.id, "email": user.email, "role": user.role}
    )


class AuthService:
    """
    Registration, login and bearer-token resolution on top of an
    explicitly provided database session.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> Optional[UserDB]:
        result = await self.db.execute(select(UserDB).where(UserDB.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> Optional[UserDB]:
        result = await self.db.execute(select(UserDB).where(UserDB.email == email))
        return result.scalar_one_or_none()

    async def register(
        self, email: Optional[str], password: Optional[str], requested_role: Optional[str] = None
    ) -> Tuple[UserDB, str]:
        if not email or not password:
            raise MissingCredentials()
        if len(password) < MIN_PASSWORD_LENGTH:
            raise WeakPassword()
        if await self.get_user_by_email(email):
            raise UserExists()

        if requested_role and requested_role != UserRole.AGENT.value:
            logger.info(f"Ignoring requested role {requested_role!r} for {email}")

        hashed_password = await run_in_threadpool(get_password_hash, password)
        new_user = UserDB(
            email=email,
            hashed_password=hashed_password,
            role=UserRole.AGENT.value,
        )
        self.db.add(new_user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise UserExists()
        await self.db.refresh(new_user)
        logger.info(f"Agent registered: {new_user.email}")
        return new_user, issue_token(new_user)

    async def authenticate_user(self, email: str, password: str) -> Optional[UserDB]:
        user = await self.get_user_by_email(email)
        if user and await run_in_threadpool(verify_password, password, user.hashed_password):
            return user
        return None

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[UserDB, str]:
        if not email or not password:
            raise MissingCredentials()
        user = await self.authenticate_user(email, password)
        if not user:
            logger.warning(f"Rejected login for {email}")
            raise InvalidCredentials()
        logger.info(f"Login successful: {user.email}")
        return user, issue_token(user)

    async def get_profile(self, user_id: str) -> UserDB:
        user = await self.get_user(user_id)
        if user is None:
            raise UserNotFound()
        return user

    async def resolve_token(self, token: str) -> CurrentUser:
        try:
            payload = decode_access_token(token)
        except JWTError as exc:
            logger.warning(f"Invalid token presented: {exc}")
            raise InvalidToken()
        user_id = payload.get("userId")
        if user_id is None:
            raise InvalidToken()
        user = await self.get_user(user_id)
        if user is None:
            raise InvalidToken("Invalid token - user not found")
        return CurrentUser(id=user.id, email=user.email, role=user.role)
