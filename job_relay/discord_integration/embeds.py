from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import List, Optional

from ..models import JobRecord
from ..tags import CompanyDirectory


EMBED_COLOR = 0x00A8E8
MAX_THREAD_NAME = 100

_METADATA_PATTERNS = [
    re.compile(r"Category:\s*[\w\s]+\.\s*", re.IGNORECASE),
    re.compile(r"Level:\s*\w+\.\s*", re.IGNORECASE),
    re.compile(r"Posted:\s*[\w\s]+\.\s*", re.IGNORECASE),
    re.compile(r"Full Title:\s*[^.]+\.\s*", re.IGNORECASE),
]
_HTML_TAG = re.compile(r"<[^>]*>")
_WHITESPACE = re.compile(r"\s+")


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_posted_date(value: str, now: Optional[datetime] = None) -> str:
    """Relative "posted" label; ``Recently`` when the timestamp is unusable."""

    if not value:
        return "Recently"

    posted = _parse_timestamp(value)
    if posted is None:
        return "Recently"

    now = now or datetime.now(timezone.utc)
    diff_days = (now - posted).days

    if diff_days <= 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 30:
        weeks = diff_days // 7
        return f"{weeks} week{'s' if weeks > 1 else ''} ago"

    if posted.year != now.year:
        return f"{posted:%b} {posted.day}, {posted.year}"
    return f"{posted:%b} {posted.day}"


def clean_job_description(description: str) -> Optional[str]:
    if not description:
        return None

    cleaned = description
    for pattern in _METADATA_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = _HTML_TAG.sub("", cleaned)
    cleaned = _WHITESPACE.sub(" ", cleaned).strip()

    if len(cleaned) < 20:
        return None

    if len(cleaned) > 300:
        cleaned = cleaned[:300]
        last_space = cleaned.rfind(" ")
        if last_space > 250:
            cleaned = cleaned[:last_space]
        cleaned += "..."

    return cleaned


def build_job_embed(job: JobRecord, tags: List[str], now: Optional[datetime] = None) -> dict:
    """Build a Discord embed as a plain dict.

    The same dict is posted as JSON by the webhook poster and turned into a
    ``discord.Embed`` by the bot poster.
    """

    location = f"{job.city or 'Not specified'}, {job.state or 'Remote'}"
    fields = [
        {"name": "🏢 Company", "value": job.employer or "Not specified", "inline": True},
        {"name": "📍 Location", "value": location, "inline": True},
        {"name": "💰 Posted", "value": format_posted_date(job.posted_at, now), "inline": True},
    ]

    if tags:
        fields.append(
            {"name": "🏷️ Tags", "value": " ".join(f"#{t}" for t in tags), "inline": False}
        )

    description = clean_job_description(job.description)
    if description:
        fields.append({"name": "📋 Description", "value": description, "inline": False})

    embed = {
        "title": job.title[:256] or "Untitled role",
        "color": EMBED_COLOR,
        "fields": fields,
    }
    if job.apply_url:
        embed["url"] = job.apply_url
    return embed


def thread_name(job: JobRecord, companies: Optional[CompanyDirectory] = None) -> str:
    emoji = (companies.emoji_for(job.employer) if companies else None) or "🏢"
    return f"{emoji} {job.title} @ {job.employer}"[:MAX_THREAD_NAME]
