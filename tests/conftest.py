"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from job_relay.config_loader import AppConfig
from job_relay.models import JobRecord


@pytest.fixture
def raw_job() -> Dict[str, Any]:
    """Raw job record as written by the fetcher."""
    return {
        "job_title": "Software Engineer, Backend",
        "employer_name": "Meta",
        "job_city": "San Francisco",
        "job_state": "CA",
        "job_description": "Build distributed systems that serve billions of people.",
        "job_apply_link": "https://example.com/apply/1",
        "job_posted_at_datetime_utc": "2026-10-18T09:00:00Z",
        "id": "meta-swe-backend-sf-12345",
    }


@pytest.fixture
def raw_jobs() -> List[Dict[str, Any]]:
    """A small mixed batch routed to different categories."""
    return [
        {"job_title": "Senior Software Engineer", "employer_name": "Google", "job_city": "Austin"},
        {"job_title": "Account Executive", "employer_name": "Salesforce", "job_city": "Chicago"},
        {"job_title": "Backend Engineer", "employer_name": "Stripe", "job_city": "Seattle"},
        {"job_title": "Recruiter", "employer_name": "Stripe", "job_city": "Denver"},
    ]


@pytest.fixture
def job(raw_job) -> JobRecord:
    return JobRecord.from_raw(raw_job)


@pytest.fixture
def store_path(tmp_path) -> Path:
    return tmp_path / "data" / "posted_jobs.json"


@pytest.fixture
def make_config(tmp_path):
    """Factory for an AppConfig rooted in a temp directory."""

    def _make(**overrides) -> AppConfig:
        values = dict(
            discord_token=None,
            discord_webhook_url="",
            default_channel_id="general",
            data_dir=tmp_path / "data",
            companies_path=tmp_path / "companies.json",
            category_channels={
                "tech": "tech-channel",
                "sales": "sales-channel",
                "hr": "hr-channel",
            },
            location_channels={},
            post_delay=1.5,
            channel_switch_delay=3.0,
        )
        values.update(overrides)
        return AppConfig(**values)

    return _make


@pytest.fixture
def write_json():
    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
