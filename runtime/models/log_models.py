"""
Storage keys and query variants for the log store.

GET /logs is one URL with three meanings depending on which query
parameters are present. The route resolves them once into one of:

    ListServers()
    ListResources(server)
    TailLog(server, resource)

and dispatches on the type, so the store never sees the raw parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from core.naming.sanitizer import sanitize


@dataclass(frozen=True)
class ResourceKey:
    """Identifies one log file. `server` is None in flat storage."""

    server: Optional[str]
    resource: str

    @classmethod
    def build(cls, server, resource, flat: bool = False) -> "ResourceKey":
        """Sanitize both parts; the server is dropped entirely when flat."""
        return cls(
            server=None if flat else sanitize(server),
            resource=sanitize(resource),
        )


@dataclass(frozen=True)
class ListServers:
    pass


@dataclass(frozen=True)
class ListResources:
    server: Optional[str] = None


@dataclass(frozen=True)
class TailLog:
    key: ResourceKey


LogQuery = Union[ListServers, ListResources, TailLog]
