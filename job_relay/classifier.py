from __future__ import annotations

import re
from typing import Mapping, Optional, Pattern, Sequence, Tuple

from .models import JobCategory, JobRecord, LocationKey


def _rule(*phrases: str) -> Pattern[str]:
    return re.compile(r"\b(" + "|".join(phrases) + r")\b")


# Order matters: the first matching rule decides the category.
CATEGORY_RULES: Sequence[Tuple[Pattern[str], JobCategory]] = (
    (
        _rule(
            "sales", "account executive", "account manager", "bdr", "sdr",
            "business development", "customer success", "revenue", "quota",
        ),
        JobCategory.SALES,
    ),
    (
        _rule(
            "marketing", "growth", "seo", "sem", "content marketing", "brand",
            "campaign", "digital marketing", "social media", "copywriter",
            "creative director",
        ),
        JobCategory.MARKETING,
    ),
    (
        _rule(
            "finance", "accounting", "financial analyst", "controller", "treasury",
            "audit", "tax", "bookkeep(?:ing|er)?", "cfo", "actuarial", "investment",
            "banker",
        ),
        JobCategory.FINANCE,
    ),
    (
        _rule(
            "healthcare", "medical", "clinical", "health", "nurse", "doctor",
            "physician", "therapist", "pharmaceutical", "biotech", "hospital",
            "patient care",
        ),
        JobCategory.HEALTHCARE,
    ),
    (
        _rule(
            "product manager", "product owner", "product marketing", "pm",
            "product lead", "product strategy", "product analyst",
        ),
        JobCategory.PRODUCT,
    ),
    (
        # "people operations manager" belongs to HR, not operations.
        _rule(
            "supply chain", "logistics", "(?<!people )operations manager",
            "procurement", "inventory", "warehouse", "distribution", "sourcing",
            "fulfillment", "shipping",
        ),
        JobCategory.SUPPLY_CHAIN,
    ),
    (
        _rule(
            "project manager", "program manager", "scrum master", "agile coach",
            "pmo", "project coordinator", "delivery manager",
        ),
        JobCategory.PROJECT_MANAGEMENT,
    ),
    (
        _rule(
            "human resources", "hr", "recruiter", "talent acquisition",
            "people operations", "compensation", "benefits", "hiring manager",
            "recruitment", "workforce",
        ),
        JobCategory.HR,
    ),
)

DEFAULT_CATEGORY = JobCategory.TECH


def _search_text(job: JobRecord) -> str:
    return f"{job.title} {job.description}".lower()


def classify(job: JobRecord) -> JobCategory:
    """Assign a job to exactly one category from its title and description.

    Anything that matches no rule (engineering, data, QA, IT, security...)
    lands in the tech category.
    """

    text = _search_text(job)
    for pattern, category in CATEGORY_RULES:
        if pattern.search(text):
            return category
    return DEFAULT_CATEGORY


def resolve_channel(
    category: JobCategory, channel_map: Mapping[str, Optional[str]]
) -> Optional[str]:
    channel_id = channel_map.get(category.value)
    if not channel_id or not channel_id.strip():
        return None
    return channel_id.strip()


_CITY_MATCHES = (
    ("san francisco", LocationKey.SAN_FRANCISCO),
    ("mountain view", LocationKey.MOUNTAIN_VIEW),
    ("sunnyvale", LocationKey.SUNNYVALE),
    ("san bruno", LocationKey.SAN_BRUNO),
    ("new york", LocationKey.NEW_YORK),
    ("manhattan", LocationKey.NEW_YORK),
    ("brooklyn", LocationKey.NEW_YORK),
    ("austin", LocationKey.AUSTIN),
    ("chicago", LocationKey.CHICAGO),
    ("seattle", LocationKey.SEATTLE),
    ("redmond", LocationKey.REDMOND),
)

_CITY_ABBREVIATIONS = {
    "sf": LocationKey.SAN_FRANCISCO,
    "nyc": LocationKey.NEW_YORK,
}

_REMOTE = re.compile(r"\b(remote|work from home|wfh)\b")
_REMOTE_ANYWHERE = re.compile(r"\b(remote|work from home|wfh|distributed|anywhere)\b")
_USA = re.compile(r"\b(usa|united states|u\.s\.|us only|us-based|us remote)\b")

# Only consulted for remote roles so a stray "CA" in a company name is ignored.
_REMOTE_STATES = (
    ("ca", LocationKey.SAN_FRANCISCO),
    ("ny", LocationKey.NEW_YORK),
    ("tx", LocationKey.AUSTIN),
    ("wa", LocationKey.SEATTLE),
    ("il", LocationKey.CHICAGO),
)


def detect_location(job: JobRecord) -> Optional[LocationKey]:
    """Pick a location channel key for a job, or ``None`` when nothing fits.

    The city field is trusted first, then city names in the title or
    description, then state codes of remote roles, then generic remote-USA
    wording.
    """

    city = job.city.lower().strip()
    state = job.state.lower().strip()
    combined = f"{job.title} {job.description} {city} {state}".lower()

    for name, key in _CITY_MATCHES:
        if name in city:
            return key

    city_words = city.split()
    for abbr, key in _CITY_ABBREVIATIONS.items():
        if city == abbr or abbr in city_words:
            return key

    for name, key in _CITY_MATCHES:
        if name in combined:
            return key

    if _REMOTE.search(combined):
        for code, key in _REMOTE_STATES:
            if state == code or re.search(rf"\b{code}\b", combined):
                if key is LocationKey.SEATTLE and "redmond" in combined:
                    return LocationKey.REDMOND
                return key

    if _REMOTE_ANYWHERE.search(combined) and _USA.search(combined):
        return LocationKey.REMOTE_USA

    return None


def resolve_location_channel(
    job: JobRecord, location_channels: Mapping[str, Optional[str]]
) -> Optional[str]:
    key = detect_location(job)
    if key is None:
        return None
    channel_id = location_channels.get(key.value)
    if not channel_id or not channel_id.strip():
        return None
    return channel_id.strip()
