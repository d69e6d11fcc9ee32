"""Authorization decisions.

Every role and ownership check in the system goes through authorize():
the auth guard asks it about role-restricted operations, the entity
validator asks it about podcast ownership. Keeping the rules here means
there is exactly one place to read them.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from castline.db.models import Podcast, User, UserRole


class Capability(str, enum.Enum):
    READ = "read"
    CREATE_PODCAST = "create_podcast"
    MANAGE_PODCAST = "manage_podcast"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None


ALLOW = Decision(allowed=True)


def authorize(
    identity: Optional[User],
    capability: Capability,
    podcast: Optional[Podcast] = None,
) -> Decision:
    """Decide whether ``identity`` may exercise ``capability``.

    MANAGE_PODCAST requires the podcast in question; it covers updating or
    deleting the podcast and creating, updating or deleting its episodes.
    """
    if capability is Capability.READ:
        return ALLOW

    if identity is None:
        return Decision(False, "not authenticated")

    if capability is Capability.CREATE_PODCAST:
        if identity.role == UserRole.HOST.value:
            return ALLOW
        return Decision(False, f"role {identity.role} can't create podcasts")

    if capability is Capability.MANAGE_PODCAST:
        if podcast is None:
            raise ValueError("MANAGE_PODCAST needs a podcast to decide on")
        if podcast.owner_id == identity.id:
            return ALLOW
        return Decision(False, "not the owner")

    raise ValueError(f"Unknown capability: {capability}")
