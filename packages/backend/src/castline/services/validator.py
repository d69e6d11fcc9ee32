"""Existence/ownership validator for podcast and episode operations.

Every resolver that addresses an existing podcast or episode calls
EntityValidator.check() before touching persistence. Checks run in a
fixed order and stop at the first failure:

1. podcast exists                 → PodcastNotFound(podcast_id)
2. episode exists in that podcast → EpisodeNotFound(episode_id, podcast_id)
3. caller owns the podcast        → NotOwner   (mutations only)

Nothing is written on any path; a failure leaves the store untouched.
"""

from typing import Optional

import structlog

from castline.auth.access import Capability, authorize
from castline.db.models import Episode, Podcast, User
from castline.errors import EpisodeNotFound, NotOwner, PodcastNotFound
from castline.services.podcast_service import PodcastService

logger = structlog.get_logger()


class EntityValidator:
    def __init__(self, podcasts: PodcastService):
        self.podcasts = podcasts

    async def check(
        self,
        podcast_id: int,
        episode_id: Optional[int] = None,
        identity: Optional[User] = None,
        require_owner: bool = False,
    ) -> tuple[Podcast, Optional[Episode]]:
        """Resolve the podcast (and episode) or raise the first failing check."""
        podcast = await self.podcasts.find_podcast(podcast_id)
        if podcast is None:
            raise PodcastNotFound(podcast_id)

        episode = None
        if episode_id is not None:
            episode = await self.podcasts.find_episode(podcast_id, episode_id)
            if episode is None:
                raise EpisodeNotFound(episode_id, podcast_id)

        if require_owner:
            decision = authorize(identity, Capability.MANAGE_PODCAST, podcast)
            if not decision.allowed:
                logger.info(
                    "validator.not_owner",
                    podcast_id=podcast_id,
                    user_id=identity.id if identity else None,
                )
                raise NotOwner()

        return podcast, episode
