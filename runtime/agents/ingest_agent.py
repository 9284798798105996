"""IngestAgent implementation.

Responsible for:
- validating an inbound record (must be a JSON object with a resource)
- splitting the routing fields (`server`, `resource`) from the payload
- letting the resource inferrer override the declared resource
- sanitizing the key and appending the payload to the LogStore
- echoing a one-line summary of the record to the console log
"""

import json
import logging
from typing import Any, Dict

from core.inference.resource_inferrer import resolve_resource
from exceptions.exceptions import InvalidPayloadError, MissingFieldError
from ..models.log_models import ResourceKey
from ..store.log_store import LogStore


logger = logging.getLogger(__name__)

TYPE_ICONS: Dict[str, str] = {
    "lua_to_nui": "📨",
    "nui_to_lua": "📤",
    "fetch_call": "🌐",
    "console": "🖥️",
}
DEFAULT_ICON = "📝"

# Payload fields shown in the console echo, first present wins.
_PREVIEW_FIELDS = ("data", "event", "callback", "url")


class IngestAgent:
    """Routes inbound log records into the LogStore.

    Parameters
    ----------
    log_store:
        Store the records are appended to. Its layout (flat or
        server-scoped) decides whether `server` is part of the key.
    """

    def __init__(self, log_store: LogStore):
        self.log_store = log_store

    def ingest(self, body: Any) -> ResourceKey:
        """Store one record and return the key it was written under.

        Raises
        ------
        InvalidPayloadError
            If the body is not a JSON object.
        MissingFieldError
            If no resource name was declared.
        """
        if not isinstance(body, dict):
            raise InvalidPayloadError()

        record = dict(body)
        declared = record.pop("resource", None)
        server = record.pop("server", None)
        if not declared:
            raise MissingFieldError("resource")

        resource = resolve_resource(record, declared)
        key = self.log_store.key(server, resource)
        self.log_store.append(key, record)

        self._echo(key, record)
        return key

    def _echo(self, key: ResourceKey, record: Dict[str, Any]) -> None:
        """Log a short, icon-tagged summary of the record."""
        record_type = record.get("type")
        icon = TYPE_ICONS.get(record_type, DEFAULT_ICON) if isinstance(record_type, str) else DEFAULT_ICON

        preview = next(
            (record[f] for f in _PREVIEW_FIELDS if record.get(f) is not None),
            None,
        )
        label = key.resource if key.server is None else f"{key.server}/{key.resource}"
        logger.info(
            "%s [%s - %s] %s",
            icon,
            label,
            record_type,
            json.dumps(preview, indent=2, ensure_ascii=False, default=str),
        )
