"""Podcast service — podcast and episode stores.

Plain persistence: existence and ownership checks happen in
EntityValidator before any mutating method here is called, so these
methods take already-resolved ORM objects.

Episodes are only ever looked up by (podcast_id, episode_id). An episode
id that exists under another podcast is simply not found here.
"""

from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from castline.db.models import Episode, Podcast, User, storable_id

logger = structlog.get_logger()


class PodcastService:
    """Business logic for podcasts and their episodes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Podcasts ───────────────────────────────────────

    async def list_podcasts(self) -> list[Podcast]:
        result = await self.db.execute(select(Podcast).order_by(Podcast.id))
        return list(result.scalars().all())

    async def find_podcast(self, podcast_id: int) -> Optional[Podcast]:
        if not storable_id(podcast_id):
            return None
        result = await self.db.execute(
            select(Podcast).where(Podcast.id == podcast_id)
        )
        return result.scalars().first()

    async def create_podcast(self, owner: User, title: str, category: str) -> Podcast:
        podcast = Podcast(owner_id=owner.id, title=title, category=category, rating=0.0)
        self.db.add(podcast)
        await self.db.commit()
        logger.info("podcast.created", podcast_id=podcast.id, owner_id=owner.id)
        return podcast

    async def update_podcast(
        self,
        podcast: Podcast,
        title: Optional[str] = None,
        category: Optional[str] = None,
        rating: Optional[float] = None,
    ) -> Podcast:
        if title is not None:
            podcast.title = title
        if category is not None:
            podcast.category = category
        if rating is not None:
            podcast.rating = rating
        await self.db.commit()
        logger.info("podcast.updated", podcast_id=podcast.id)
        return podcast

    async def delete_podcast(self, podcast: Podcast) -> int:
        """Delete a podcast and all of its episodes in one unit of work.

        Children first, then the parent, then a single commit. Returns the
        number of episodes removed.
        """
        result = await self.db.execute(
            delete(Episode).where(Episode.podcast_id == podcast.id)
        )
        await self.db.delete(podcast)
        await self.db.commit()
        logger.info(
            "podcast.deleted", podcast_id=podcast.id, episodes_deleted=result.rowcount
        )
        return result.rowcount

    # ─── Episodes ───────────────────────────────────────

    async def list_episodes(self, podcast_id: int) -> list[Episode]:
        result = await self.db.execute(
            select(Episode)
            .where(Episode.podcast_id == podcast_id)
            .order_by(Episode.id)
        )
        return list(result.scalars().all())

    async def find_episode(self, podcast_id: int, episode_id: int) -> Optional[Episode]:
        if not (storable_id(podcast_id) and storable_id(episode_id)):
            return None
        result = await self.db.execute(
            select(Episode).where(
                Episode.podcast_id == podcast_id,
                Episode.id == episode_id,
            )
        )
        return result.scalars().first()

    async def create_episode(self, podcast: Podcast, title: str, category: str) -> Episode:
        episode = Episode(podcast_id=podcast.id, title=title, category=category)
        self.db.add(episode)
        await self.db.commit()
        logger.info("episode.created", podcast_id=podcast.id, episode_id=episode.id)
        return episode

    async def update_episode(
        self,
        episode: Episode,
        title: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Episode:
        if title is not None:
            episode.title = title
        if category is not None:
            episode.category = category
        await self.db.commit()
        logger.info(
            "episode.updated", podcast_id=episode.podcast_id, episode_id=episode.id
        )
        return episode

    async def delete_episode(self, episode: Episode) -> None:
        await self.db.delete(episode)
        await self.db.commit()
        logger.info(
            "episode.deleted", podcast_id=episode.podcast_id, episode_id=episode.id
        )
