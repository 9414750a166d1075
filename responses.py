# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Envelope helpers for API responses.

Success bodies look like ``{"status": "ok", "action": ..., "data": ...}``.
Error bodies carry ``status`` "error", the ``action``, a machine-readable
``error_code`` (``GAME_NOT_FOUND``, ``INVALID_PAYLOAD`` ...), a ``message``
for people, and ``details``: a list of per-field problems, empty when there
are none.

The helpers return plain dicts; the Flask layer serializes them.
"""

from typing import Any


def success_response(action: str, data: Any) -> dict[str, Any]:
    return {"status": "ok", "action": action, "data": data}


def error_response(action: str, error_code: str, message: str,
                   details: list[str] | None = None) -> dict[str, Any]:
    """Error envelope; *details* defaults to an empty list."""
    return {
        "status": "error",
        "action": action,
        "error_code": error_code,
        "message": message,
        "details": list(details or []),
    }


def player_ref(player_id: str, player_name: str) -> dict[str, str]:
    """Player reference carrying both the id and the display name."""
    return {"playerId": player_id, "playerName": player_name}
