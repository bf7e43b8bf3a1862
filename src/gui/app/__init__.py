"""Application layer for GUI bootstrap and lifecycle management."""

from .bootstrap import create_app, AppContext  # noqa: F401

__all__ = ["create_app", "AppContext"]
