"""
Auth Service - credential store operations on top of UserRepository
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from auth_utils import hash_password, verify_password
from crud.user import UserRepository, normalize_email
from errors import InvalidCredential, UserNotFound

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, db: AsyncSession):
        self.user_repo = UserRepository(db)

    async def register(self, name: str, email: str, password: str) -> int:
        """
        Create an account.

        Raises:
            DuplicateEmail: If the email is already registered
        """
        user = await self.user_repo.add(name, email, hash_password(password))
        logger.info(f"Registered user {user.id}")
        return user.id

    async def verify(self, email: str, password: str) -> int:
        """
        Check a login attempt.

        Raises:
            UserNotFound: No account for this email
            InvalidCredential: Password does not match
        """
        user = await self.user_repo.find_by_email(email)
        if not user:
            raise UserNotFound(normalize_email(email))
        if not verify_password(password, user.hashed_password):
            raise InvalidCredential(user.email)
        return user.id
