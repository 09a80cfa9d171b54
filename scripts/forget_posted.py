"""Remove identifiers from the posted jobs file so those jobs are announced again.

Examples:
    python scripts/forget_posted.py meta-software-engineer-backend-san-francisco
    python scripts/forget_posted.py --first 3
"""

from __future__ import annotations

import argparse
import logging

from job_relay.config_loader import load_config
from job_relay.identity import compute_identifier
from job_relay.posted_store import PostedJobStore
from job_relay.relay import load_new_jobs


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Forget posted job identifiers.")
    p.add_argument("ids", nargs="*", help="Identifiers to forget.")
    p.add_argument(
        "--first",
        type=int,
        default=0,
        help="Also forget the first N jobs of the new jobs file.",
    )
    return p.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    args = parse_args()
    cfg = load_config()

    ids = list(args.ids)
    if args.first:
        ids.extend(compute_identifier(job) for job in load_new_jobs(cfg.new_jobs_path)[: args.first])

    store = PostedJobStore(cfg.posted_jobs_path)
    before = len(store)
    removed = store.forget(ids)

    print(f"Posted jobs: {before} -> {len(store)} ({removed} removed)")
    for job_id in ids:
        print(f"  {job_id}")


if __name__ == "__main__":
    main()
