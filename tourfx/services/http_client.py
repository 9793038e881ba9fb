from __future__ import annotations

"""Async HTTP helper for GET-JSON calls to rate providers.

One attempt per call. Every failure mode (transport error, timeout, HTTP
status >= 400, undecodable body) surfaces as HttpError so callers need a
single except clause.
"""
from typing import Any, Dict, Mapping, Optional

import httpx


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            resp = await client.get(url, params=params, headers=headers)
            if resp.status_code >= 400:
                raise HttpError(
                    f"HTTP {resp.status_code} {resp.reason_phrase} for {resp.url.copy_remove_param('app_id')}"
                )
            data = resp.json()
        except httpx.HTTPError as e:
            raise HttpError(f"Failed to fetch JSON from {url}: {e}") from e
        except ValueError as e:  # JSON decode
            raise HttpError(f"Invalid JSON from {url}: {e}") from e
    if not isinstance(data, dict):
        raise HttpError(f"Expected a JSON object from {url}")
    return data
