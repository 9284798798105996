"""
LogStore: append-only JSONL logs, one file per (server, resource).

Layout (server-scoped, the default):

    <log_dir>/<server>/<resource>.jsonl

Layout (flat, single server):

    <log_dir>/<resource>.jsonl

Each line is one self-contained JSON object with at least `timestamp`.
Names arrive already sanitized through ResourceKey.

There is no in-process locking. Appends are single whole-line writes in
append mode and rely on the OS for atomicity; a tail racing a clear may
see a truncated file.
"""

import json
import logging
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.naming.sanitizer import sanitize
from ..models.log_models import ResourceKey


logger = logging.getLogger(__name__)

LOG_FILE_SUFFIX = ".jsonl"
DEFAULT_TAIL_LIMIT = 200


class LogStore:
    """File-backed, append-only log storage.

    Parameters
    ----------
    log_dir:
        Root directory. Created lazily on the first append.
    flat:
        If True, resources live directly under `log_dir` and the server
        part of every key is ignored.
    default_limit:
        Number of records `tail()` returns when no limit is given.
    """

    def __init__(
        self,
        log_dir: str = "logs",
        flat: bool = False,
        default_limit: int = DEFAULT_TAIL_LIMIT,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.flat = flat
        self.default_limit = default_limit

    def key(self, server, resource) -> ResourceKey:
        """Build a sanitized key matching this store's layout."""
        return ResourceKey.build(server, resource, flat=self.flat)

    def _server_dir(self, server: Optional[str]) -> Path:
        if self.flat or server is None:
            return self.log_dir
        return self.log_dir / sanitize(server)

    def _log_path(self, key: ResourceKey) -> Path:
        """Return the JSONL path for the given key."""
        return self._server_dir(key.server) / f"{key.resource}{LOG_FILE_SUFFIX}"

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(self, key: ResourceKey, record: Dict[str, Any]) -> Dict[str, Any]:
        """Stamp the record with the current time and append it as one line.

        A `timestamp` supplied by the client is discarded. Returns the entry
        exactly as written.
        """
        entry: Dict[str, Any] = {"timestamp": datetime.now(timezone.utc).isoformat()}
        entry.update((k, v) for k, v in record.items() if k != "timestamp")

        path = self._log_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        # ASCII escapes keep lone surrogates from failing the utf-8 write.
        line = json.dumps(entry) + "\n"
        with path.open("a", encoding="utf-8") as f:
            f.write(line)

        return entry

    def clear(self, key: ResourceKey) -> bool:
        """Truncate the key's file.

        Returns False (and touches nothing) if there is no such file.
        """
        path = self._log_path(key)
        if not path.is_file():
            return False

        with path.open("w", encoding="utf-8"):
            pass
        logger.info("[STORE] Logs cleared for %s", path)
        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def tail(self, key: ResourceKey, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return the last `limit` records, oldest first.

        A missing file yields an empty list. Lines that are not valid JSON
        objects are skipped with a warning instead of failing the read.
        """
        if limit is None:
            limit = self.default_limit
        if limit <= 0:
            return []

        path = self._log_path(key)
        if not path.is_file():
            return []

        records: deque = deque(maxlen=limit)
        skipped = 0
        with path.open("r", encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except ValueError:
                    skipped += 1
                    continue
                if not isinstance(record, dict):
                    skipped += 1
                    continue
                records.append(record)

        if skipped:
            logger.warning("[STORE] Skipped %d malformed line(s) in %s", skipped, path)
        return list(records)

    def list_resources(self, server: Optional[str] = None) -> List[str]:
        """List resource names that have a log file.

        In server-scoped storage this looks under the server's directory;
        a server with no directory yet simply has no resources.
        """
        directory = self._server_dir(server)
        if not directory.is_dir():
            return []
        return sorted(
            p.name[: -len(LOG_FILE_SUFFIX)]
            for p in directory.iterdir()
            if p.is_file() and p.name.endswith(LOG_FILE_SUFFIX)
        )

    def list_servers(self) -> List[str]:
        """List server directories directly under the root (none when flat)."""
        if self.flat or not self.log_dir.is_dir():
            return []
        return sorted(p.name for p in self.log_dir.iterdir() if p.is_dir())
