from __future__ import annotations

import logging
from datetime import datetime, timezone

import requests
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from .config_loader import load_config
from .discord_integration.webhook import send_summary
from .relay import run_relay_once


logger = logging.getLogger("job_relay.scheduler")


def _relay_job() -> None:
    logger.info("Starting scheduled job relay at %s", datetime.now(timezone.utc).isoformat())
    cfg = load_config()
    stats = run_relay_once(cfg)

    if cfg.discord_webhook_url:
        try:
            send_summary(stats, cfg.discord_webhook_url)
        except requests.RequestException as exc:
            logger.error("Could not send relay summary: %s", exc)

    logger.info("Completed scheduled relay: %s", stats)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    cfg = load_config()
    scheduler = BlockingScheduler(timezone="UTC")

    scheduler.add_job(
        _relay_job,
        CronTrigger(hour=cfg.relay_hour_utc, minute=0),
        id="daily_job_relay",
        replace_existing=True,
    )

    logger.info("Scheduler started. Daily job relay at %02d:00 UTC", cfg.relay_hour_utc)
    scheduler.start()


if __name__ == "__main__":  # pragma: no cover
    main()
