"""Structured JSON logging to stdout."""

from typing import Any, Dict
from datetime import datetime, timezone
import json

from travel_resolver.obs.context import request_id_var, tool_call_var

_REDACTED_FIELDS = ("passenger", "passenger_name", "passengerName")


def redact_name(value: Any) -> Any:
    """Keep initials only, e.g. "Ada Lovelace" -> "A. L."."""
    s = str(value).strip() if value is not None else ""
    if not s:
        return s
    return " ".join(f"{part[0].upper()}." for part in s.split())


def log_event(event: str, **fields: Any) -> None:
    now = datetime.now(timezone.utc).isoformat()
    payload: Dict[str, Any] = {
        "ts": now,
        "level": fields.pop("level", "INFO"),
        "event": event,
        "request_id": request_id_var.get(),
    }
    payload.setdefault("tool_call", tool_call_var.get())

    for k, v in fields.items():
        if k in _REDACTED_FIELDS:
            payload[k] = redact_name(v)
        else:
            payload[k] = v

    try:
        print(json.dumps(payload, separators=(",", ":"), default=str))
    except (TypeError, ValueError):
        # never let a bad field take the request down with it
        pass
