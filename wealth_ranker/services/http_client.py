from __future__ import annotations

"""Lightweight HTTP client util.

GET a JSON document with a bounded timeout. A single attempt per call: the
callers own their fallback strategy (endpoint variants, stale cache).
"""
from typing import Any, Mapping, Optional

import httpx


class HttpError(Exception):
    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


def get_json(
    url: str,
    *,
    timeout: float = 10.0,
    headers: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Any:
    try:
        with httpx.Client(
            timeout=timeout, headers=headers, transport=transport
        ) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return resp.json()
    except httpx.HTTPStatusError as e:
        raise HttpError(f"HTTP {e.response.status_code} for {url}", url) from e
    except httpx.HTTPError as e:
        raise HttpError(f"Failed to fetch {url}: {e!r}", url) from e
    except ValueError as e:  # JSON decode
        raise HttpError(f"Invalid JSON from {url}: {e}", url) from e
