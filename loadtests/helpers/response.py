"""Response error extraction for load test observability.

Stockroom errors have the shape ``{"error": "msg"}``. Framework-level
errors (unknown route, etc.) use ``{"detail": "msg"}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict):
        for key in ("error", "detail"):
            if key in body:
                return str(body[key])[:300]

    return str(body)[:300]
