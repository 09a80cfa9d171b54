from __future__ import annotations

import logging

import requests

from job_relay.config_loader import load_config
from job_relay.discord_integration.webhook import send_summary
from job_relay.relay import run_relay_once


logger = logging.getLogger("job_relay.scripts.run_relay_once")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    cfg = load_config()
    stats = run_relay_once(cfg)

    if cfg.discord_webhook_url:
        try:
            send_summary(stats, cfg.discord_webhook_url)
        except requests.RequestException as exc:
            logger.error("Could not send relay summary: %s", exc)


if __name__ == "__main__":
    main()
