"""Top-level views."""
