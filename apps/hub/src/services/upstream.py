from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

import httpx

logger = logging.getLogger("pws.hub.upstream")

ERROR_BODY_PREVIEW = 200
DECODE_BODY_PREVIEW = 120


class UpstreamError(RuntimeError):
    """Raised when the weather provider cannot produce a usable payload."""


class UpstreamRequestError(UpstreamError):
    pass


class UpstreamStatusError(UpstreamError):
    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP {status_code}: {body[:ERROR_BODY_PREVIEW]}")
        self.status_code = status_code


class UpstreamDecodeError(UpstreamError):
    def __init__(self, body: str) -> None:
        super().__init__(f"Non-JSON response: {body[:DECODE_BODY_PREVIEW]}")


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
) -> Any:
    """GET ``url`` and return its JSON body.

    Returns ``None`` for 204 or blank bodies, whatever the status code. Non-2xx
    responses raise :class:`UpstreamStatusError` and unparsable bodies raise
    :class:`UpstreamDecodeError`. Only a single attempt is made.
    """
    try:
        response = await client.get(url, params=params)
    except httpx.RequestError as exc:
        raise UpstreamRequestError(f"Request failed: {exc.__class__.__name__}: {exc}") from exc

    text = response.text
    if response.status_code == 204 or not text.strip():
        logger.debug("Empty upstream body from %s (status %s)", url, response.status_code)
        return None
    if not response.is_success:
        raise UpstreamStatusError(response.status_code, text)
    try:
        return json.loads(text)
    except ValueError as exc:
        raise UpstreamDecodeError(text) from exc
