from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

import discord

from ..models import JobRecord
from ..tags import CompanyDirectory, generate_tags
from .embeds import build_job_embed, thread_name


logger = logging.getLogger("job_relay.bot")

# Discord caps applied forum tags per thread.
MAX_FORUM_TAGS = 5
AUTO_ARCHIVE_MINUTES = 10080


def _matching_forum_tags(channel: discord.ForumChannel, tags: List[str]) -> List[discord.ForumTag]:
    applied: List[discord.ForumTag] = []
    for tag in tags:
        wanted = tag.lower()
        for forum_tag in channel.available_tags:
            name = forum_tag.name.lower()
            if (name == wanted or wanted in name) and forum_tag not in applied:
                applied.append(forum_tag)
                break
        if len(applied) >= MAX_FORUM_TAGS:
            break
    return applied


class DiscordChannelPoster:
    """Posts jobs to channels by id through a logged-in discord.py client.

    Forum channels get one thread per job; text channels get a plain message.
    """

    def __init__(self, client: discord.Client, companies: Optional[CompanyDirectory] = None) -> None:
        self.client = client
        self.companies = companies

    def _get_channel(self, channel_id: str):
        try:
            return self.client.get_channel(int(channel_id))
        except (TypeError, ValueError):
            return None

    async def post(self, channel_id: str, job: JobRecord) -> bool:
        channel = self._get_channel(channel_id)
        if channel is None:
            logger.error("Channel not found: %s", channel_id)
            return False

        tags = generate_tags(job, self.companies)
        embed = discord.Embed.from_dict(build_job_embed(job, tags))

        try:
            if isinstance(channel, discord.ForumChannel):
                name = thread_name(job, self.companies)
                await channel.create_thread(
                    name=name,
                    embed=embed,
                    applied_tags=_matching_forum_tags(channel, tags),
                    auto_archive_duration=AUTO_ARCHIVE_MINUTES,
                    reason=f"New job posting: {job.title} at {job.employer}",
                )
                logger.info("Created forum post: %s in #%s", name, channel.name)
            else:
                await channel.send(embed=embed)
                logger.info("Posted message: %s at %s in #%s", job.title, job.employer, channel)
        except discord.HTTPException as exc:
            logger.error("Error posting job %s at %s: %s", job.title, job.employer, exc)
            return False

        return True


def create_client(on_ready: Callable[[discord.Client], Awaitable[None]]) -> discord.Client:
    """Create a client that runs ``on_ready`` once after login, then closes."""

    intents = discord.Intents.default()
    client = discord.Client(intents=intents)

    @client.event
    async def on_ready():
        logger.info("Discord bot logged in as %s", client.user)
        try:
            await on_ready(client)
        finally:
            await client.close()

    return client


def run_client(token: str, on_ready: Callable[[discord.Client], Awaitable[None]]) -> None:
    if not token:
        raise RuntimeError("DISCORD_TOKEN not configured")

    client = create_client(on_ready)
    client.run(token, log_handler=None)
