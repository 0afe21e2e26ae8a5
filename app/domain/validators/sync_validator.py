"""Validators for sync change envelopes. Pure functions, no infrastructure or DB access."""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from app.domain.exceptions import BadChangeError
from app.domain.models.sync import SyncChange, SyncOperation


def parse_client_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a client-supplied last-modified value into an aware UTC datetime.
    Accepts datetime, ISO-8601 strings (trailing Z allowed) and epoch milliseconds.
    Returns None when missing or unparseable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_sync_change(raw: Any) -> SyncChange:
    """Build a SyncChange from a client envelope. Raises BadChangeError if malformed."""
    if not isinstance(raw, Mapping):
        raise BadChangeError("change must be an object")

    record_id = raw.get("id", raw.get("_id"))
    if isinstance(record_id, (int, float)) and not isinstance(record_id, bool):
        record_id = str(record_id)
    if not isinstance(record_id, str) or not record_id.strip():
        raise BadChangeError("change id is required")

    try:
        op = SyncOperation(raw.get("op"))
    except ValueError as e:
        raise BadChangeError(f"unsupported op: {raw.get('op')!r}") from e

    payload = raw.get("payload")
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise BadChangeError("payload must be an object")

    return SyncChange(
        record_id=record_id.strip(),
        op=op,
        payload=dict(payload),
        updated_at=parse_client_timestamp(raw.get("updatedAt", raw.get("updated_at"))),
    )


def change_identifier(raw: Any) -> Optional[str]:
    """Best-effort id of a (possibly malformed) change for failure reporting."""
    if not isinstance(raw, Mapping):
        return None
    value = raw.get("id", raw.get("_id"))
    return None if value is None else str(value)
