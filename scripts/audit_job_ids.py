"""Compare upstream ``id`` fields with the locally computed dedup identifiers.

The relay only ever trusts the computed identifier; this report shows where
the fetcher's own ids disagree with it.
"""

from __future__ import annotations

import argparse

from job_relay.config_loader import load_config
from job_relay.identity import compute_identifier
from job_relay.posted_store import PostedJobStore
from job_relay.relay import load_new_jobs


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Audit upstream vs computed job ids.")
    p.add_argument("--limit", type=int, default=5, help="Number of jobs to show.")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    cfg = load_config()
    jobs = load_new_jobs(cfg.new_jobs_path)
    store = PostedJobStore(cfg.posted_jobs_path)

    mismatched = 0
    for i, job in enumerate(jobs):
        computed = compute_identifier(job)
        if job.upstream_id and job.upstream_id != computed:
            mismatched += 1
        if i >= args.limit:
            continue
        print(f"\nJob {i + 1}: {job.title} @ {job.employer}")
        print(f"  upstream id: {job.upstream_id or '-'}")
        print(f"  computed id: {computed}")
        print(f"  posted (computed): {store.has_been_posted(computed)}")
        if job.upstream_id:
            print(f"  posted (upstream): {store.has_been_posted(job.upstream_id)}")

    print(f"\n{mismatched}/{len(jobs)} jobs carry an upstream id that differs from the computed one")


if __name__ == "__main__":
    main()
