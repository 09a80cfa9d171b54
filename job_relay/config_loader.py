from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv


BASE_DIR = Path(__file__).resolve().parent.parent

# Category value -> environment variable holding its channel id.
CATEGORY_CHANNEL_ENV = {
    "tech": "DISCORD_TECH_CHANNEL_ID",
    "sales": "DISCORD_SALES_CHANNEL_ID",
    "marketing": "DISCORD_MARKETING_CHANNEL_ID",
    "finance": "DISCORD_FINANCE_CHANNEL_ID",
    "healthcare": "DISCORD_HEALTHCARE_CHANNEL_ID",
    "product": "DISCORD_PRODUCT_CHANNEL_ID",
    "supply-chain": "DISCORD_SUPPLY_CHANNEL_ID",
    "project-management": "DISCORD_PM_CHANNEL_ID",
    "hr": "DISCORD_HR_CHANNEL_ID",
}

LOCATION_CHANNEL_ENV = {
    "remote-usa": "DISCORD_REMOTE_USA_CHANNEL_ID",
    "new-york": "DISCORD_NY_CHANNEL_ID",
    "austin": "DISCORD_AUSTIN_CHANNEL_ID",
    "chicago": "DISCORD_CHICAGO_CHANNEL_ID",
    "seattle": "DISCORD_SEATTLE_CHANNEL_ID",
    "redmond": "DISCORD_REDMOND_CHANNEL_ID",
    "mountain-view": "DISCORD_MV_CHANNEL_ID",
    "san-francisco": "DISCORD_SF_CHANNEL_ID",
    "sunnyvale": "DISCORD_SUNNYVALE_CHANNEL_ID",
    "san-bruno": "DISCORD_SAN_BRUNO_CHANNEL_ID",
}


@dataclass
class AppConfig:
    discord_token: str | None
    discord_webhook_url: str
    default_channel_id: str | None
    data_dir: Path
    companies_path: Path
    category_channels: Dict[str, Optional[str]] = field(default_factory=dict)
    location_channels: Dict[str, Optional[str]] = field(default_factory=dict)
    post_delay: float = 1.5
    channel_switch_delay: float = 3.0
    relay_hour_utc: int = 18

    @property
    def new_jobs_path(self) -> Path:
        return self.data_dir / "new_jobs.json"

    @property
    def posted_jobs_path(self) -> Path:
        return self.data_dir / "posted_jobs.json"

    @property
    def multi_channel(self) -> bool:
        return any(self.category_channels.values())

    @property
    def location_routing(self) -> bool:
        return any(self.location_channels.values())


def _env_str(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


def _resolve_path(value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else BASE_DIR / path


def load_config() -> AppConfig:
    load_dotenv(BASE_DIR / ".env")

    return AppConfig(
        discord_token=_env_str("DISCORD_TOKEN"),
        discord_webhook_url=os.getenv("DISCORD_WEBHOOK_URL", ""),
        default_channel_id=_env_str("DISCORD_CHANNEL_ID"),
        data_dir=_resolve_path(os.getenv("JOB_RELAY_DATA_DIR", "data")),
        companies_path=_resolve_path(os.getenv("COMPANIES_CONFIG", "config/companies.json")),
        category_channels={key: _env_str(env) for key, env in CATEGORY_CHANNEL_ENV.items()},
        location_channels={key: _env_str(env) for key, env in LOCATION_CHANNEL_ENV.items()},
        post_delay=float(os.getenv("POST_DELAY_SECONDS", "1.5")),
        channel_switch_delay=float(os.getenv("CHANNEL_SWITCH_DELAY_SECONDS", "3.0")),
        relay_hour_utc=int(os.getenv("RELAY_HOUR_UTC", "18")),
    )
