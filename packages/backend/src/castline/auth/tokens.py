"""Session token issuing and verification.

Tokens are HS256 JWTs carrying only the user id: ``{"id": 42}``. Nothing
is stored server-side. Without ``token_expire_minutes`` the payload has no
time claims, so the same user id always produces the same token.

verify() only proves the token was signed by us. Whether the user still
exists is the auth guard's problem.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from castline.config import settings
from castline.errors import InvalidToken


def issue(user_id: int, expires_minutes: Optional[int] = None) -> str:
    """Sign a token for ``user_id``."""
    payload: dict = {"id": user_id}
    minutes = expires_minutes or settings.token_expire_minutes
    if minutes:
        payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify(token: str) -> int:
    """Decode a token and return the user id it carries.

    Raises InvalidToken on a bad signature, a malformed token, an expired
    token, or a payload without an integer ``id``.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token has expired")
    except jwt.InvalidTokenError as e:
        raise InvalidToken(f"Invalid token: {e}")

    user_id = payload.get("id")
    # bool is an int subclass; reject it explicitly
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise InvalidToken("Token payload has no user id")
    return user_id
