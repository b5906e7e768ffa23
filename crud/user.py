"""
UserRepository - accounts keyed by a normalized (lowercased, trimmed) email
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from database_models import User
from errors import DuplicateEmail


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def add(self, name: str, email: str, hashed_password: str) -> User:
        """
        Insert an account and flush so its id is available before commit.

        Raises:
            DuplicateEmail: The email is already registered (unique constraint)
        """
        user = User(name=name.strip(), email=normalize_email(email), hashed_password=hashed_password)
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmail(user.email) from e
        return user
