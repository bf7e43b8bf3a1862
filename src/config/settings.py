"""Global configuration and constants for the users table application."""

from __future__ import annotations

from typing import Final

USERS_URL: Final = "https://jsonplaceholder.typicode.com/users"
DEFAULT_USER_AGENT: Final = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/115.0 Safari/537.36"
)
DEFAULT_TIMEOUT: Final = 15  # seconds

# Table presentation
WINDOW_TITLE: Final = "Users Table"
PLACEHOLDER_ROWS: Final = 5
EMPTY_MESSAGE: Final = "No users found"
FETCH_ERROR_MESSAGE: Final = "Failed to load users!"
WEBSITE_SCHEME: Final = "https"
TOAST_TIMEOUT_MS: Final = 5000  # error toast auto-dismiss
