"""Reusable GUI widgets: toast host and skeleton loader."""
