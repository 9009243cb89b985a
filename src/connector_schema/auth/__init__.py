"""Token acquisition for warehouse connections."""

from .oauth import OAuthTokenProvider

__all__ = ["OAuthTokenProvider"]
