from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Set


logger = logging.getLogger("job_relay.posted_store")

MAX_POSTED_ENTRIES = 5000


class PostedJobStore:
    """Set of job identifiers that have already been announced.

    Backed by a JSON array that is rewritten wholesale on every save. The
    array is sorted, and when it grows past ``max_entries`` only the
    lexicographically largest identifiers are kept. This is sort-order
    retention, not time-based: a recent identifier that sorts early can be
    evicted before an older one that sorts late.
    """

    def __init__(self, path: Path, max_entries: int = MAX_POSTED_ENTRIES) -> None:
        self.path = Path(path)
        self.max_entries = max_entries
        self._posted: Set[str] = self._load()

    def _load(self) -> Set[str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.info("No posted jobs file at %s, starting empty", self.path)
            return set()
        except (OSError, ValueError) as exc:
            logger.error("Could not load posted jobs from %s: %s", self.path, exc)
            return set()

        if not isinstance(data, list):
            logger.error("Posted jobs file %s is not a JSON array, ignoring it", self.path)
            return set()

        return {item for item in data if isinstance(item, str)}

    def __len__(self) -> int:
        return len(self._posted)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._posted

    def identifiers(self) -> List[str]:
        return sorted(self._posted)

    def has_been_posted(self, job_id: str) -> bool:
        return job_id in self._posted

    def mark_posted(self, job_id: str) -> None:
        self._posted.add(job_id)
        self.save()

    def mark_posted_many(self, job_ids: Iterable[str]) -> None:
        self._posted.update(job_ids)
        self.save()

    def forget(self, job_ids: Iterable[str]) -> int:
        """Drop identifiers so those jobs get announced again on the next run."""

        removed = 0
        for job_id in set(job_ids):
            if job_id in self._posted:
                self._posted.discard(job_id)
                removed += 1
        if removed:
            self.save()
        return removed

    def save(self) -> None:
        entries = sorted(self._posted)
        if len(entries) > self.max_entries:
            evicted = len(entries) - self.max_entries
            entries = entries[-self.max_entries:]
            self._posted = set(entries)
            logger.debug("Evicted %d posted job ids over the %d cap", evicted, self.max_entries)

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Same directory as the target so os.replace stays a rename.
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=self.path.name + ".",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(entries, f, indent=2)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to save posted jobs to %s: %s", self.path, exc)
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    logger.warning("Could not remove temp file %s", tmp_name)
