"""Error taxonomy.

Two families:

- Business errors (CastlineError subclasses) are raised by services and
  the entity validator. The operation dispatcher folds them into the
  ``{ok: false, error: <message>}`` envelope; they never become transport
  faults.
- Transport errors (InvalidToken, Forbidden) abort a request before any
  resolver logic runs and surface in the response's ``errors`` list.

The message strings are part of the public contract — clients match on them.
"""

from typing import Any, Optional


class CastlineError(Exception):
    """Base for all business errors. ``message`` is safe to return to clients."""

    default_message = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)


# ─── Accounts ───────────────────────────────────────────


class DuplicateAccount(CastlineError):
    default_message = "There is a user with that email already"


class AccountNotFound(CastlineError):
    """Login with an email nobody registered."""

    default_message = "User not found"


class WrongPassword(CastlineError):
    default_message = "Wrong password"


class UserNotFound(CastlineError):
    """Profile lookup by id found nothing."""

    default_message = "User Not Found"


# ─── Podcasts / episodes ────────────────────────────────


class PodcastNotFound(CastlineError):
    def __init__(self, podcast_id: int):
        self.podcast_id = podcast_id
        super().__init__(
            f"Podcast with id {podcast_id} not found",
            context={"podcast_id": podcast_id},
        )


class EpisodeNotFound(CastlineError):
    def __init__(self, episode_id: int, podcast_id: int):
        self.episode_id = episode_id
        self.podcast_id = podcast_id
        super().__init__(
            f"Episode with id {episode_id} not found in podcast with id {podcast_id}",
            context={"episode_id": episode_id, "podcast_id": podcast_id},
        )


class NotOwner(CastlineError):
    default_message = "You are not the owner of this podcast"


class InvalidInput(CastlineError):
    default_message = "Invalid input"


# ─── Transport-level ────────────────────────────────────


class InvalidToken(Exception):
    """Raised by the token service when a token can't be verified."""


class Forbidden(Exception):
    """Raised by the auth guard. Aborts the whole request."""

    message = "Forbidden resource"

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(self.message)
