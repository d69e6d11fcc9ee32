"""Podcast and episode resolvers.

Reads are public. Creating a podcast needs the Host role. Every other
mutation goes through the validator with ``require_owner=True``, so it
fails with the podcast/episode not-found message or NotOwner before
anything is written.
"""

from castline.api.registry import ResolverContext, registry
from castline.auth.access import Capability
from castline.schemas.common import CoreOutput, CreatedOutput
from castline.schemas.podcast import (
    CreateEpisodeInput,
    CreatePodcastInput,
    EpisodeIdInput,
    EpisodeRead,
    EpisodesInput,
    EpisodesOutput,
    PodcastDetail,
    PodcastIdInput,
    PodcastOutput,
    PodcastRead,
    PodcastsOutput,
    UpdateEpisodeInput,
    UpdatePodcastInput,
)


# ─── Reads ──────────────────────────────────────────────


@registry.operation("getAllPodcasts", output=PodcastsOutput, public=True)
async def get_all_podcasts(body, ctx: ResolverContext):
    podcasts = await ctx.podcasts.list_podcasts()
    return PodcastsOutput(
        ok=True, podcasts=[PodcastRead.model_validate(p) for p in podcasts]
    )


@registry.operation("getPodcast", input=PodcastIdInput, output=PodcastOutput, public=True)
async def get_podcast(body: PodcastIdInput, ctx: ResolverContext):
    podcast, _ = await ctx.validator.check(body.id)
    episodes = await ctx.podcasts.list_episodes(podcast.id)
    return PodcastOutput(ok=True, podcast=PodcastDetail.build(podcast, episodes))


@registry.operation("getEpisodes", input=EpisodesInput, output=EpisodesOutput, public=True)
async def get_episodes(body: EpisodesInput, ctx: ResolverContext):
    podcast, _ = await ctx.validator.check(body.podcast_id)
    episodes = await ctx.podcasts.list_episodes(podcast.id)
    return EpisodesOutput(
        ok=True, episodes=[EpisodeRead.model_validate(e) for e in episodes]
    )


# ─── Podcast mutations ──────────────────────────────────


@registry.operation(
    "createPodcast",
    input=CreatePodcastInput,
    output=CreatedOutput,
    requires=Capability.CREATE_PODCAST,
)
async def create_podcast(body: CreatePodcastInput, ctx: ResolverContext):
    podcast = await ctx.podcasts.create_podcast(ctx.user, body.title, body.category)
    return CreatedOutput(ok=True, id=podcast.id)


@registry.operation("updatePodcast", input=UpdatePodcastInput)
async def update_podcast(body: UpdatePodcastInput, ctx: ResolverContext):
    podcast, _ = await ctx.validator.check(
        body.id, identity=ctx.user, require_owner=True
    )
    await ctx.podcasts.update_podcast(
        podcast, **body.payload.model_dump(exclude_unset=True)
    )
    return CoreOutput(ok=True)


@registry.operation("deletePodcast", input=PodcastIdInput)
async def delete_podcast(body: PodcastIdInput, ctx: ResolverContext):
    podcast, _ = await ctx.validator.check(
        body.id, identity=ctx.user, require_owner=True
    )
    await ctx.podcasts.delete_podcast(podcast)
    return CoreOutput(ok=True)


# ─── Episode mutations ──────────────────────────────────


@registry.operation("createEpisode", input=CreateEpisodeInput, output=CreatedOutput)
async def create_episode(body: CreateEpisodeInput, ctx: ResolverContext):
    podcast, _ = await ctx.validator.check(
        body.podcast_id, identity=ctx.user, require_owner=True
    )
    episode = await ctx.podcasts.create_episode(podcast, body.title, body.category)
    return CreatedOutput(ok=True, id=episode.id)


@registry.operation("updateEpisode", input=UpdateEpisodeInput)
async def update_episode(body: UpdateEpisodeInput, ctx: ResolverContext):
    _, episode = await ctx.validator.check(
        body.podcast_id, body.episode_id, identity=ctx.user, require_owner=True
    )
    changes = body.model_dump(include={"title", "category"}, exclude_unset=True)
    await ctx.podcasts.update_episode(episode, **changes)
    return CoreOutput(ok=True)


@registry.operation("deleteEpisode", input=EpisodeIdInput)
async def delete_episode(body: EpisodeIdInput, ctx: ResolverContext):
    _, episode = await ctx.validator.check(
        body.podcast_id, body.episode_id, identity=ctx.user, require_owner=True
    )
    await ctx.podcasts.delete_episode(episode)
    return CoreOutput(ok=True)
