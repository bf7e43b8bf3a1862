"""HTTP client utilities for reading JSON resources.

Separated from the fetch service so the transport can be swapped in tests
(``httpx.MockTransport``) without touching parsing or GUI code.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


class HttpError(RuntimeError):
    pass


def get_json(
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Any:
    """GET ``url`` once and return the decoded JSON body.

    Raises ``HttpError`` for transport failures, non-success status codes and
    bodies that are not valid JSON. No retries are attempted.
    """
    close_client = False
    if client is None:
        headers = {"User-Agent": user_agent or settings.DEFAULT_USER_AGENT}
        client = httpx.Client(headers=headers, timeout=timeout or settings.DEFAULT_TIMEOUT)
        close_client = True
    try:
        try:
            resp = client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HttpError(f"{url} returned status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise HttpError(f"Request to {url} failed: {e}") from e
        logger.debug("GET %s -> %s (%d bytes)", url, resp.status_code, len(resp.content))
        try:
            return resp.json()
        except ValueError as e:
            raise HttpError(f"Response from {url} is not valid JSON: {e}") from e
    finally:
        if close_client:
            client.close()
