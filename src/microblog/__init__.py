"""Minimal blogging backend: posts, comments, sessions and server-rendered views."""

__version__ = "0.1.0"
