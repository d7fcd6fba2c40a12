"""Record construction and merge-with-fallback for participant documents.

Everything here is storage-independent: callers read the existing record,
merge, and hand the result to the store.
"""

from datetime import datetime, timezone
from typing import Any


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


def new_participant_record(participant_id: str, name: Any, now: str) -> dict[str, Any]:
    return {
        "id": participant_id,
        "name": name if isinstance(name, str) and name else None,
        "created_at": now,
        "answers": [],
        "roles": None,
        "photoMap": {},
    }


def merge_participant_record(
    participant_id: str,
    existing: dict[str, Any] | None,
    payload: dict[str, Any] | None,
    now: str,
) -> dict[str, Any]:
    """Build the record to persist from the stored one and an incoming save.

    Each field is replaced whole when the payload supplies it and otherwise
    falls back to the stored value, then to a default. The id always comes
    from the caller, never from the payload.
    """
    current = existing or {}
    incoming = payload or {}

    name = incoming.get("name")
    if not (isinstance(name, str) and name):
        name = current.get("name") or None

    answers = incoming.get("answers")
    if not isinstance(answers, list):
        answers = current.get("answers")
        if answers is None:
            answers = []

    roles = incoming.get("roles")
    if roles is None:
        roles = current.get("roles")

    photo_map = incoming.get("photoMap")
    if photo_map is None:
        photo_map = current.get("photoMap")
        if photo_map is None:
            photo_map = {}

    return {
        "id": participant_id,
        "name": name,
        "created_at": current.get("created_at") or now,
        "updated_at": now,
        "answers": answers,
        "roles": roles,
        "photoMap": photo_map,
    }
