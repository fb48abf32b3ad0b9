"""Readable failure messages for the Locust scenarios.

Two error shapes come back from the API:

- request validation (422): ``{"detail": [{"loc": [...], "msg": "..."}]}``
- domain errors (400/404/409): ``{"error": ...}`` where the payload is a
  message or a ``{field: [messages]}`` mapping
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def _flatten(messages) -> str:
    if isinstance(messages, dict):
        return " | ".join(f"{field}: {_flatten(value)}" for field, value in messages.items())
    if isinstance(messages, list):
        return ", ".join(str(m) for m in messages)
    return str(messages)


def extract_error_detail(response: Response) -> str:
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    detail = body.get("detail")
    if isinstance(detail, list):
        return " | ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', err)}" for err in detail
        )

    if "error" in body:
        return _flatten(body["error"])

    return str(body)[:300]


def failure(action: str, response: Response) -> str:
    """``"<action> failed: <status>, <detail>"`` for ``resp.failure``."""
    return f"{action} failed: {response.status_code}, {extract_error_detail(response)}"
