# src/microblog/services/__init__.py
"""Business logic services for the microblog application."""

from .oauth import ExternalIdentityProvider, OAuthConfig

__all__ = [
    "ExternalIdentityProvider",
    "OAuthConfig",
]
