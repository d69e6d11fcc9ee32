"""Auth guard — per-request identity resolution and access gate.

Each request is in one of two states:

- Unauthenticated: no token header, a token that fails verification, or
  a token whose user no longer exists (stale or forged).
- Authenticated(user): a verified token that resolves to a stored user.

get_auth_context() is a FastAPI dependency, so the resolved identity lives
exactly as long as the request. guard() runs before any resolver and
raises Forbidden for private or role-restricted operations the caller
can't use; the resolver is then never called.
"""

from typing import Optional

import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from castline.auth import tokens
from castline.auth.access import authorize
from castline.config import settings
from castline.db.engine import get_db
from castline.db.models import User, storable_id
from castline.errors import Forbidden, InvalidToken

logger = structlog.get_logger()


class AuthContext:
    """The caller's identity for one request (``user`` is None when anonymous)."""

    def __init__(self, user: Optional[User] = None):
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user else None


async def resolve_identity(token: Optional[str], db: AsyncSession) -> AuthContext:
    """Turn a raw header value into an AuthContext. Never raises."""
    if not token:
        return AuthContext()

    try:
        user_id = tokens.verify(token)
    except InvalidToken as e:
        logger.info("auth.token_rejected", reason=str(e))
        return AuthContext()

    user = await db.get(User, user_id) if storable_id(user_id) else None
    if user is None:
        logger.info("auth.stale_token", user_id=user_id)
        return AuthContext()

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return AuthContext(user)


async def get_auth_context(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthContext:
    """FastAPI dependency — reads the token header and resolves the caller."""
    return await resolve_identity(request.headers.get(settings.token_header), db)


def guard(operation, context: AuthContext) -> None:
    """Let the operation through or raise Forbidden.

    ``operation`` needs ``public`` (bool) and ``requires`` (a Capability or
    None) attributes.
    """
    if operation.public:
        return

    if not context.is_authenticated:
        logger.info("auth.forbidden", operation=operation.name, reason="anonymous")
        raise Forbidden("authentication required")

    if operation.requires is not None:
        decision = authorize(context.user, operation.requires)
        if not decision.allowed:
            logger.info(
                "auth.forbidden", operation=operation.name, reason=decision.reason
            )
            raise Forbidden(decision.reason)
