"""User service — the credential store plus account operations.

Service layer separates business logic from request handling. Resolvers
call services, services call the database. Failures are raised as
castline.errors business errors; the operation dispatcher turns them
into envelopes.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from castline.auth import tokens
from castline.auth.password import hash_password, verify_password
from castline.config import settings
from castline.db.models import User, UserRole, storable_id
from castline.errors import (
    AccountNotFound,
    DuplicateAccount,
    UserNotFound,
    WrongPassword,
)

logger = structlog.get_logger()


class UserService:
    """Business logic for accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Lookups ────────────────────────────────────────

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        if not storable_id(user_id):
            return None
        return await self.db.get(User, user_id)

    async def get_profile(self, user_id: int) -> User:
        user = await self.find_by_id(user_id)
        if user is None:
            raise UserNotFound()
        return user

    # ─── Accounts ───────────────────────────────────────

    async def create_account(self, email: str, password: str, role: UserRole) -> User:
        """Register a new account. The email must not be taken."""
        # Checked before hashing so a duplicate costs no bcrypt round
        if await self.find_by_email(email):
            raise DuplicateAccount()

        user = User(
            email=email,
            password_hash=hash_password(password, rounds=settings.bcrypt_rounds),
            role=role.value,
        )
        self.db.add(user)
        await self._commit_unique_email()
        logger.info("user.created", user_id=user.id, role=user.role)
        return user

    async def login(self, email: str, password: str) -> str:
        """Check credentials and return a session token.

        Unknown email and wrong password are reported with different
        messages ("User not found" vs "Wrong password").
        """
        user = await self.find_by_email(email)
        if user is None:
            raise AccountNotFound()
        if not verify_password(password, user.password_hash):
            logger.info("user.login_failed", user_id=user.id)
            raise WrongPassword()
        logger.info("user.logged_in", user_id=user.id)
        return tokens.issue(user.id)

    async def edit_profile(
        self,
        user: User,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """Change the caller's email and/or password."""
        if email is not None and email != user.email:
            if await self.find_by_email(email):
                raise DuplicateAccount()
            user.email = email
        if password is not None:
            user.password_hash = hash_password(password, rounds=settings.bcrypt_rounds)
        await self._commit_unique_email()
        logger.info(
            "user.profile_edited",
            user_id=user.id,
            email_changed=email is not None,
            password_changed=password is not None,
        )
        return user

    async def _commit_unique_email(self) -> None:
        # A concurrent writer can claim the email between the lookup and here
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("user.duplicate_email_race")
            raise DuplicateAccount()
