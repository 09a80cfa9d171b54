from __future__ import annotations

import re
from typing import Any, Mapping, Union

from .models import JobRecord

_WHITESPACE = re.compile(r"\s+")
_NON_WORD = re.compile(r"[^\w-]", re.ASCII)
_DASH_RUNS = re.compile(r"-+")


def normalize_part(value: str) -> str:
    """Reduce one identifier component to lowercase ``[a-z0-9_-]`` words.

    Example: ``"  Software Engineer, Backend "`` -> ``"software-engineer-backend"``
    """

    text = _WHITESPACE.sub("-", (value or "").lower().strip())
    text = _NON_WORD.sub("-", text)
    text = _DASH_RUNS.sub("-", text)
    return text.strip("-")


def compute_identifier(job: Union[JobRecord, Mapping[str, Any]]) -> str:
    """Return the dedup key for a job: ``employer-title-city``.

    Only employer, title and city take part. Description, apply link, posting
    date and any upstream ``id`` are ignored, so two fetches of the same
    logical job always produce the same key.
    """

    if not isinstance(job, JobRecord):
        job = JobRecord.from_raw(job)

    return "-".join(
        [normalize_part(job.employer), normalize_part(job.title), normalize_part(job.city)]
    )
