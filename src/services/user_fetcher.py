"""Data fetcher for the users collection.

Collapses transport, status and payload problems into a single
``FetchFailure`` so callers only deal with one error kind.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from config import settings
from core.http_client import HttpError, get_json
from domain.models import UserRecord
from parsing.errors import ParsingError
from parsing.user_parser import parse_users

__all__ = ["FetchFailure", "fetch_users"]

logger = logging.getLogger(__name__)


class FetchFailure(RuntimeError):
    """Raised when the users collection cannot be loaded for any reason."""


def fetch_users(url: str | None = None, *, client: Optional[httpx.Client] = None) -> List[UserRecord]:
    target = url or settings.USERS_URL
    logger.info("Fetching users from %s", target)
    try:
        payload = get_json(target, client=client)
        users = parse_users(payload)
    except (HttpError, ParsingError) as e:
        logger.error("Fetching users from %s failed: %s", target, e)
        raise FetchFailure(str(e)) from e
    logger.info("Fetched %d users", len(users))
    return users
