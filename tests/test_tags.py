"""
Tests for tag generation and the company directory.
"""

import json

from job_relay.models import JobRecord
from job_relay.tags import CompanyDirectory, generate_tags, load_company_directory


def _directory():
    return CompanyDirectory(
        tiers={
            "faang_plus": [{"name": "Meta", "emoji": "📘"}],
            "fintech": [{"name": "Coinbase", "emoji": "🪙"}],
            "top_tech": [{"name": "Adobe", "emoji": "🎨"}],
        }
    )


class TestGenerateTags:
    """Test tag generation from job text."""

    def test_senior_backend_python(self):
        job = JobRecord(
            title="Senior Backend Engineer",
            employer="Meta",
            city="San Francisco",
            description="Python services on AWS",
        )
        tags = generate_tags(job, _directory())
        assert tags[0] == "Senior"
        assert "SF" in tags
        assert "FAANG" in tags
        assert {"Python", "AWS", "Backend"} <= set(tags)

    def test_entry_level(self):
        assert generate_tags(JobRecord(title="New Grad Software Engineer"))[0] == "EntryLevel"

    def test_mid_level_default(self):
        assert generate_tags(JobRecord(title="Software Engineer"))[0] == "MidLevel"

    def test_remote(self):
        assert "Remote" in generate_tags(JobRecord(title="Engineer", city="Remote - USA"))

    def test_java_does_not_match_javascript(self):
        tags = generate_tags(JobRecord(title="Engineer", description="javascript and node.js"))
        assert "JavaScript" in tags
        assert "NodeJS" in tags
        assert "Java" not in tags

    def test_ai_needs_word_boundary(self):
        assert "AI" not in generate_tags(JobRecord(title="Maintenance Engineer"))

    def test_role_tags(self):
        tags = generate_tags(JobRecord(title="Product Manager, UX"))
        assert "ProductManager" in tags
        assert "Design" in tags

    def test_analyst_is_data_science(self):
        assert "DataScience" in generate_tags(JobRecord(title="Data Analyst"))

    def test_no_duplicates(self):
        tags = generate_tags(JobRecord(title="Data Scientist", description="data science"))
        assert tags.count("DataScience") == 1

    def test_unlisted_company_has_no_tier(self):
        assert "FAANG" not in generate_tags(JobRecord(title="Engineer", employer="Acme"), _directory())


class TestCompanyDirectory:
    """Test loading and looking up company tiers."""

    def test_emoji_lookup_covers_untagged_tiers(self):
        directory = _directory()
        assert directory.emoji_for("Adobe") == "🎨"
        assert directory.tier_of("Adobe") is None
        assert directory.emoji_for("Acme") is None

    def test_load_missing_file(self, tmp_path):
        assert load_company_directory(tmp_path / "nope.json").tiers == {}

    def test_load_malformed_file(self, tmp_path):
        path = tmp_path / "companies.json"
        path.write_text("[", encoding="utf-8")
        assert load_company_directory(path).tiers == {}

    def test_load_file(self, tmp_path):
        path = tmp_path / "companies.json"
        path.write_text(json.dumps({"gaming": [{"name": "Riot Games", "emoji": "🎮"}]}), encoding="utf-8")
        directory = load_company_directory(path)
        assert directory.tier_of("Riot Games") == "gaming"

    def test_string_entries_are_ignored(self):
        directory = CompanyDirectory(tiers={"faang_plus": ["Meta", {"name": "Apple", "emoji": "🍎"}]})
        assert directory.tier_of("Meta") is None
        assert directory.emoji_for("Apple") == "🍎"
        assert generate_tags(JobRecord(title="Engineer", employer="Meta"), directory) == ["MidLevel"]

    def test_load_drops_string_entries(self, tmp_path):
        path = tmp_path / "companies.json"
        path.write_text(
            json.dumps({"faang_plus": ["Meta", {"name": "Apple", "emoji": "🍎"}], "notes": "skip"}),
            encoding="utf-8",
        )
        directory = load_company_directory(path)
        assert directory.tiers == {"faang_plus": [{"name": "Apple", "emoji": "🍎"}]}
        assert directory.tier_of("Apple") == "faang_plus"
