"""
Tests for Discord embed rendering helpers.
"""

from datetime import datetime, timezone

from job_relay.discord_integration.embeds import (
    EMBED_COLOR,
    build_job_embed,
    clean_job_description,
    format_posted_date,
    thread_name,
)
from job_relay.models import JobRecord
from job_relay.tags import CompanyDirectory

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestFormatPostedDate:
    """Test relative posting dates."""

    def test_missing_or_malformed(self):
        assert format_posted_date("", NOW) == "Recently"
        assert format_posted_date("last tuesday", NOW) == "Recently"

    def test_relative_labels(self):
        assert format_posted_date("2026-10-19T08:00:00Z", NOW) == "Today"
        assert format_posted_date("2026-10-18T08:00:00Z", NOW) == "Yesterday"
        assert format_posted_date("2026-10-15T08:00:00Z", NOW) == "4 days ago"
        assert format_posted_date("2026-10-10T08:00:00Z", NOW) == "1 week ago"
        assert format_posted_date("2026-10-01T08:00:00Z", NOW) == "2 weeks ago"

    def test_older_dates(self):
        assert format_posted_date("2026-08-03T08:00:00Z", NOW) == "Aug 3"
        assert format_posted_date("2025-08-03T08:00:00", NOW) == "Aug 3, 2025"


class TestCleanJobDescription:
    """Test description cleanup."""

    def test_strips_metadata_and_html(self):
        text = "Category: Software Engineering. Level: Senior. <p>Build   the payments platform</p>"
        assert clean_job_description(text) == "Build the payments platform"

    def test_too_short(self):
        assert clean_job_description("Short one") is None
        assert clean_job_description("") is None

    def test_truncates_on_word_boundary(self):
        cleaned = clean_job_description("word " * 100)
        assert cleaned.endswith("...")
        assert len(cleaned) <= 303
        assert not cleaned[:-3].endswith(" ")


class TestBuildJobEmbed:
    """Test the embed payload."""

    def test_fields(self, job):
        embed = build_job_embed(job, ["Senior", "Backend"], now=NOW)

        assert embed["title"] == "Software Engineer, Backend"
        assert embed["url"] == "https://example.com/apply/1"
        assert embed["color"] == EMBED_COLOR
        values = {f["name"]: f["value"] for f in embed["fields"]}
        assert values["🏢 Company"] == "Meta"
        assert values["📍 Location"] == "San Francisco, CA"
        assert values["💰 Posted"] == "Yesterday"
        assert values["🏷️ Tags"] == "#Senior #Backend"
        assert "📋 Description" in values

    def test_defaults_for_missing_fields(self):
        embed = build_job_embed(JobRecord(title="Engineer"), [], now=NOW)
        values = {f["name"]: f["value"] for f in embed["fields"]}

        assert "url" not in embed
        assert values["🏢 Company"] == "Not specified"
        assert values["📍 Location"] == "Not specified, Remote"
        assert values["💰 Posted"] == "Recently"
        assert "🏷️ Tags" not in values


class TestThreadName:
    """Test forum thread titles."""

    def test_with_company_emoji(self, job):
        directory = CompanyDirectory(tiers={"faang_plus": [{"name": "Meta", "emoji": "📘"}]})
        assert thread_name(job, directory) == "📘 Software Engineer, Backend @ Meta"

    def test_default_emoji_and_truncation(self):
        name = thread_name(JobRecord(title="x" * 200, employer="Acme"))
        assert name.startswith("🏢 ")
        assert len(name) == 100
