"""Pydantic schemas for podcasts and episodes.

Separate input schemas (what resolvers accept) from read schemas (what
they return). Update payloads leave fields unset rather than None so
``model_dump(exclude_unset=True)`` yields only what the caller changed.
"""

from typing import Annotated, Optional

from pydantic import Field, StringConstraints

from castline.db.models import Episode, Podcast
from castline.schemas.common import CAMEL, CamelModel, CoreOutput

# Surrounding whitespace is dropped before the length check, so "   " is empty.
Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Category = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


# ─── Podcasts ───────────────────────────────────────────


class PodcastIdInput(CamelModel):
    id: int


class CreatePodcastInput(CamelModel):
    title: Title
    category: Category


class UpdatePodcastPayload(CamelModel):
    title: Optional[Title] = None
    category: Optional[Category] = None
    rating: Optional[float] = Field(None, ge=0, le=5)


class UpdatePodcastInput(CamelModel):
    id: int
    payload: UpdatePodcastPayload


# ─── Episodes ───────────────────────────────────────────


class EpisodesInput(CamelModel):
    podcast_id: int


class CreateEpisodeInput(CamelModel):
    podcast_id: int
    title: Title
    category: Category


class UpdateEpisodeInput(CamelModel):
    podcast_id: int
    episode_id: int
    title: Optional[Title] = None
    category: Optional[Category] = None


class EpisodeIdInput(CamelModel):
    podcast_id: int
    episode_id: int


# ─── Read models ────────────────────────────────────────


class EpisodeRead(CamelModel):
    id: int
    podcast_id: int
    title: str
    category: str

    model_config = {**CAMEL, "from_attributes": True}


class PodcastRead(CamelModel):
    id: int
    title: str
    category: str
    rating: float
    owner_id: int

    model_config = {**CAMEL, "from_attributes": True}


class PodcastDetail(PodcastRead):
    """Podcast with its episodes, oldest first."""

    episodes: list[EpisodeRead] = []

    @classmethod
    def build(cls, podcast: Podcast, episodes: list[Episode]) -> "PodcastDetail":
        base = PodcastRead.model_validate(podcast)
        return cls(
            **base.model_dump(),
            episodes=[EpisodeRead.model_validate(e) for e in episodes],
        )


class PodcastsOutput(CoreOutput):
    podcasts: Optional[list[PodcastRead]] = None


class PodcastOutput(CoreOutput):
    podcast: Optional[PodcastDetail] = None


class EpisodesOutput(CoreOutput):
    episodes: Optional[list[EpisodeRead]] = None
