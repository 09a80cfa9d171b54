from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class JobCategory(str, Enum):
    SALES = "sales"
    MARKETING = "marketing"
    FINANCE = "finance"
    HEALTHCARE = "healthcare"
    PRODUCT = "product"
    SUPPLY_CHAIN = "supply-chain"
    PROJECT_MANAGEMENT = "project-management"
    HR = "hr"
    TECH = "tech"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    JobCategory.SALES: "Sales",
    JobCategory.MARKETING: "Marketing",
    JobCategory.FINANCE: "Finance",
    JobCategory.HEALTHCARE: "Healthcare",
    JobCategory.PRODUCT: "Product Management",
    JobCategory.SUPPLY_CHAIN: "Supply Chain",
    JobCategory.PROJECT_MANAGEMENT: "Project Management",
    JobCategory.HR: "Human Resources",
    JobCategory.TECH: "Software/Tech",
}


class LocationKey(str, Enum):
    REMOTE_USA = "remote-usa"
    NEW_YORK = "new-york"
    AUSTIN = "austin"
    CHICAGO = "chicago"
    SEATTLE = "seattle"
    REDMOND = "redmond"
    MOUNTAIN_VIEW = "mountain-view"
    SAN_FRANCISCO = "san-francisco"
    SUNNYVALE = "sunnyvale"
    SAN_BRUNO = "san-bruno"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class JobRecord:
    """One scraped job posting as written by the upstream fetcher.

    Every field is a string; absent or null values are empty strings so the
    identity and classification code never has to check for ``None``.
    """

    title: str = ""
    employer: str = ""
    city: str = ""
    state: str = ""
    description: str = ""
    apply_url: str = ""
    posted_at: str = ""
    upstream_id: str = ""
    raw: Optional[Dict[str, Any]] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_raw(cls, item: Mapping[str, Any]) -> "JobRecord":
        return cls(
            title=_as_text(item.get("job_title")),
            employer=_as_text(item.get("employer_name")),
            city=_as_text(item.get("job_city")),
            state=_as_text(item.get("job_state")),
            description=_as_text(item.get("job_description")),
            apply_url=_as_text(item.get("job_apply_link")),
            posted_at=_as_text(
                item.get("job_posted_at_datetime_utc") or item.get("job_posted_at")
            ),
            upstream_id=_as_text(item.get("id")),
            raw=dict(item),
        )


@dataclass
class RelayStats:
    total: int = 0
    already_posted: int = 0
    posted: int = 0
    failed: int = 0
    skipped: int = 0
    by_category: Dict[str, int] = field(default_factory=dict)

    def record_posted(self, category: JobCategory) -> None:
        self.posted += 1
        self.by_category[category.value] = self.by_category.get(category.value, 0) + 1
