from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Protocol

from .classifier import classify, resolve_channel, resolve_location_channel
from .config_loader import AppConfig, load_config
from .discord_integration.bot import DiscordChannelPoster, run_client
from .discord_integration.webhook import WebhookPoster
from .identity import compute_identifier
from .models import JobRecord, RelayStats
from .posted_store import PostedJobStore
from .tags import load_company_directory


logger = logging.getLogger("job_relay.relay")


class JobPoster(Protocol):
    async def post(self, channel_id: str, job: JobRecord) -> bool:
        ...


def load_new_jobs(path: Path) -> List[JobRecord]:
    """Read the fetcher's output. A missing or unreadable file means no jobs."""

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No new jobs file at %s", path)
        return []
    except (OSError, ValueError) as exc:
        logger.error("Could not read new jobs from %s: %s", path, exc)
        return []

    if not isinstance(data, list):
        logger.error("New jobs file %s is not a JSON array", path)
        return []

    return [JobRecord.from_raw(item) for item in data if isinstance(item, dict)]


async def _post(poster: JobPoster, channel_id: str, job: JobRecord) -> bool:
    # One bad record must not end the batch.
    try:
        return await poster.post(channel_id, job)
    except Exception:
        logger.exception("Unexpected error posting %s at %s to %s", job.title, job.employer, channel_id)
        return False


async def relay_jobs(
    jobs: List[JobRecord],
    store: PostedJobStore,
    poster: JobPoster,
    config: AppConfig,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RelayStats:
    """Post every not-yet-announced job to its category channel.

    Jobs go out one at a time in input order. A job is marked as posted only
    after its category post succeeds, and the store is checked again right
    before each post so duplicates within one batch are announced once.
    """

    stats = RelayStats(total=len(jobs))
    last_channel: Optional[str] = None

    pending = [job for job in jobs if not store.has_been_posted(compute_identifier(job))]
    stats.already_posted = len(jobs) - len(pending)
    if not pending:
        logger.info("No new jobs to post, all %d already posted", len(jobs))
        return stats

    logger.info(
        "Posting %d new jobs (%d already posted)", len(pending), stats.already_posted
    )
    if config.multi_channel:
        logger.info("Multi-channel mode: routing jobs to category channels")
    else:
        logger.info("Single-channel mode: posting to %s", config.default_channel_id)
    if config.location_routing:
        logger.info("Location routing enabled")

    for job in pending:
        job_id = compute_identifier(job)
        if store.has_been_posted(job_id):
            logger.info("Skipping already posted: %s at %s", job.title, job.employer)
            stats.already_posted += 1
            continue

        category = classify(job)
        channel_id = resolve_channel(category, config.category_channels) or config.default_channel_id
        if not channel_id:
            logger.warning("No channel configured for %s (%s), skipping", job.title, category.value)
            stats.skipped += 1
            continue

        if last_channel is not None:
            await sleep(config.post_delay if channel_id == last_channel else config.channel_switch_delay)
        last_channel = channel_id

        if not await _post(poster, channel_id, job):
            stats.failed += 1
            continue

        store.mark_posted(job_id)
        stats.record_posted(category)

        location_channel = resolve_location_channel(job, config.location_channels)
        if location_channel and location_channel != channel_id:
            await sleep(config.post_delay)
            if not await _post(poster, location_channel, job):
                logger.warning("Location post failed for %s at %s", job.title, job.employer)

    logger.info(
        "Posting complete: %d posted, %d failed, %d skipped",
        stats.posted,
        stats.failed,
        stats.skipped,
    )
    return stats


def run_relay_once(config: Optional[AppConfig] = None) -> RelayStats:
    """Load config, store and jobs, then relay through the bot or the webhook."""

    cfg = config or load_config()
    store = PostedJobStore(cfg.posted_jobs_path)
    companies = load_company_directory(cfg.companies_path)
    jobs = load_new_jobs(cfg.new_jobs_path)

    if cfg.discord_token:
        if not jobs:
            logger.info("No new jobs to post")
            return RelayStats()

        result: List[RelayStats] = []

        async def _relay(client) -> None:
            poster = DiscordChannelPoster(client, companies)
            result.append(await relay_jobs(jobs, store, poster, cfg))

        run_client(cfg.discord_token, _relay)
        if not result:
            raise RuntimeError("Discord client closed before the relay finished")
        return result[0]

    if cfg.discord_webhook_url:
        poster = WebhookPoster(cfg.discord_webhook_url, companies)
        # A webhook is bound to one channel, so every category routes there.
        webhook_cfg = replace(
            cfg,
            category_channels={},
            location_channels={},
            default_channel_id=cfg.default_channel_id or "webhook",
        )
        return asyncio.run(relay_jobs(jobs, store, poster, webhook_cfg))

    raise RuntimeError("Neither DISCORD_TOKEN nor DISCORD_WEBHOOK_URL is configured")
