from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .models import JobRecord


logger = logging.getLogger("job_relay.tags")

# Tier name in companies.json -> tag. Order decides which tier wins.
TIER_TAGS = (
    ("faang_plus", "FAANG"),
    ("unicorn_startups", "Unicorn"),
    ("fintech", "Fintech"),
    ("gaming", "Gaming"),
)

# Tiers consulted for emoji lookup, tagged or not.
EMOJI_TIERS = ("faang_plus", "unicorn_startups", "fintech", "gaming", "top_tech", "enterprise_saas")

MAJOR_CITIES = {
    "san francisco": "SF",
    "sf": "SF",
    "bay area": "SF",
    "new york": "NYC",
    "nyc": "NYC",
    "manhattan": "NYC",
    "seattle": "Seattle",
    "bellevue": "Seattle",
    "redmond": "Seattle",
    "austin": "Austin",
    "los angeles": "LA",
    "la": "LA",
    "boston": "Boston",
    "chicago": "Chicago",
    "denver": "Denver",
}

TECH_STACK = {
    "react": "React",
    "vue": "Vue",
    "angular": "Angular",
    "node": "NodeJS",
    "python": "Python",
    "java": "Java",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "aws": "AWS",
    "azure": "Azure",
    "gcp": "GCP",
    "cloud": "Cloud",
    "kubernetes": "K8s",
    "docker": "Docker",
    "terraform": "Terraform",
    "machine learning": "ML",
    "ai": "AI",
    "data science": "DataScience",
    "ios": "iOS",
    "android": "Android",
    "mobile": "Mobile",
    "frontend": "Frontend",
    "backend": "Backend",
    "fullstack": "FullStack",
    "devops": "DevOps",
    "security": "Security",
    "blockchain": "Blockchain",
}

_TECH_PATTERNS = [
    (re.compile(rf"\b{re.escape(keyword)}(?:\.?js)?\b"), tag) for keyword, tag in TECH_STACK.items()
]


@dataclass
class CompanyDirectory:
    """Company tiers loaded from ``companies.json``.

    The file maps a tier name to a list of ``{"name": ..., "emoji": ...}``
    entries.
    """

    tiers: Dict[str, List[dict]] = field(default_factory=dict)

    def _entries(self, tier: str) -> List[dict]:
        return [c for c in self.tiers.get(tier, []) if isinstance(c, dict)]

    def tier_of(self, employer: str) -> Optional[str]:
        for tier, _ in TIER_TAGS:
            if any(company.get("name") == employer for company in self._entries(tier)):
                return tier
        return None

    def emoji_for(self, employer: str) -> Optional[str]:
        for tier in EMOJI_TIERS:
            for company in self._entries(tier):
                if company.get("name") == employer:
                    return company.get("emoji")
        return None


def load_company_directory(path: Path) -> CompanyDirectory:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return CompanyDirectory()
    except ValueError as exc:
        logger.warning("Ignoring malformed companies file %s: %s", path, exc)
        return CompanyDirectory()

    if not isinstance(data, dict):
        return CompanyDirectory()
    # Entries without a name mapping are dropped.
    return CompanyDirectory(
        tiers={
            k: [c for c in v if isinstance(c, dict)]
            for k, v in data.items()
            if isinstance(v, list)
        }
    )


def _seniority_tag(title: str) -> str:
    if any(k in title for k in ("senior", "sr.", "staff", "principal")):
        return "Senior"
    if any(k in title for k in ("junior", "jr.", "entry", "new grad", "graduate")):
        return "EntryLevel"
    return "MidLevel"


def generate_tags(job: JobRecord, companies: Optional[CompanyDirectory] = None) -> List[str]:
    title = job.title.lower()
    description = job.description.lower()
    city = job.city.lower().strip()

    tags = [_seniority_tag(title)]

    if "remote" in description or "remote" in title or "remote" in city:
        tags.append("Remote")

    if city in MAJOR_CITIES:
        tags.append(MAJOR_CITIES[city])

    if companies is not None:
        tier = companies.tier_of(job.employer)
        if tier:
            tags.append(dict(TIER_TAGS)[tier])

    search_text = f"{title} {description}"
    for pattern, tag in _TECH_PATTERNS:
        if pattern.search(search_text):
            tags.append(tag)

    if "DataScience" not in tags and ("data scientist" in title or "analyst" in title):
        tags.append("DataScience")
    if "ML" not in tags and ("machine learning" in title or "ml engineer" in title):
        tags.append("ML")
    if "product manager" in title or re.search(r"\bpm\b", title):
        tags.append("ProductManager")
    if "designer" in title or re.search(r"\b(ux|ui)\b", title):
        tags.append("Design")

    # dedupe, keep first-seen order
    return list(dict.fromkeys(tags))
