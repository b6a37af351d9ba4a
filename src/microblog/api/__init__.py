# src/microblog/api/__init__.py
"""HTTP surface: JSON resources and server-rendered views."""

from .endpoints import auth_router, comments_router, posts_router, views_router

__all__ = [
    "auth_router",
    "comments_router",
    "posts_router",
    "views_router",
]
