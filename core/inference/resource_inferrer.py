"""
Best-effort recovery of the real resource behind an intercepted call.

NUI callbacks and fetches address their owner directly, e.g.

    https://my_resource/closeMenu

so the host part of that address is a better label than whatever resource
name the client reported. Only two record types carry such an address:

    nui_to_lua  -> record["callback"]
    fetch_call  -> record["url"]
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional


logger = logging.getLogger(__name__)

# scheme://<token>/... at the very start of the address
_RESOURCE_URL_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*://([A-Za-z0-9_-]+)/")

# record type -> field holding the address
_ADDRESS_FIELDS: Dict[str, str] = {
    "nui_to_lua": "callback",
    "fetch_call": "url",
}


def infer_resource(record: Dict[str, Any]) -> Optional[str]:
    """Return the resource name encoded in the record's address, or None.

    Never raises: a lookup or matching failure is logged and treated as
    "nothing inferred".
    """
    try:
        field = _ADDRESS_FIELDS.get(record.get("type"))
        if field is None:
            return None

        address = record.get(field)
        if not isinstance(address, str):
            return None

        match = _RESOURCE_URL_RE.match(address)
        return match.group(1) if match else None

    except Exception as e:
        logger.warning("[INFER] Could not infer resource from record: %s", e)
        return None


def resolve_resource(record: Dict[str, Any], declared: Any) -> Any:
    """Pick the resource name to store under.

    The inferred name wins whenever there is one; otherwise the
    client-declared name is returned untouched.
    """
    inferred = infer_resource(record)
    if inferred is not None:
        if inferred != declared:
            logger.debug(
                "[INFER] Overriding declared resource %r with %r", declared, inferred
            )
        return inferred
    return declared
