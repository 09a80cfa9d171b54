from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests

from ..models import JobCategory, JobRecord, RelayStats
from ..tags import CompanyDirectory, generate_tags
from .embeds import build_job_embed


logger = logging.getLogger("job_relay.webhook")

USERNAME = "Job Relay"


class WebhookPoster:
    """Posts every job to a single Discord webhook.

    Webhooks are bound to one channel, so the ``channel_id`` handed to
    :meth:`post` is only used for logging.
    """

    def __init__(
        self,
        webhook_url: str,
        companies: Optional[CompanyDirectory] = None,
        timeout: float = 20,
    ) -> None:
        if not webhook_url:
            raise RuntimeError("DISCORD_WEBHOOK_URL not configured")
        self.webhook_url = webhook_url
        self.companies = companies
        self.timeout = timeout

    def send(self, job: JobRecord) -> None:
        tags = generate_tags(job, self.companies)
        payload = {
            "username": USERNAME,
            "embeds": [build_job_embed(job, tags)],
        }
        resp = requests.post(self.webhook_url, json=payload, timeout=self.timeout)
        resp.raise_for_status()

    async def post(self, channel_id: str, job: JobRecord) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self.send, job)
        except requests.RequestException as exc:
            logger.error("Webhook post failed for %s at %s: %s", job.title, job.employer, exc)
            return False

        logger.info("Posted via webhook: %s at %s (%s)", job.title, job.employer, channel_id)
        return True


def format_summary(stats: RelayStats) -> str:
    lines = [
        "📊 **Job Relay Summary**",
        f"Jobs Loaded: **{stats.total}**",
        f"Posted: **{stats.posted}**",
        f"Already Posted: **{stats.already_posted}**",
        f"Failed: **{stats.failed}**",
    ]
    if stats.skipped:
        lines.append(f"No Channel Configured: **{stats.skipped}**")

    if stats.by_category:
        lines.append("Posted by Category:")
        for category, count in sorted(stats.by_category.items()):
            lines.append(f"- {JobCategory(category).label}: {count}")

    return "\n".join(lines)


def send_summary(stats: RelayStats, webhook_url: str) -> None:
    if not webhook_url:
        raise RuntimeError("DISCORD_WEBHOOK_URL not configured")

    payload = {
        "username": USERNAME,
        "content": format_summary(stats),
    }

    resp = requests.post(webhook_url, json=payload, timeout=20)
    resp.raise_for_status()
