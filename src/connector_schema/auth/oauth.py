from __future__ import annotations

import logging
import threading
import time
from typing import Optional

import requests

from ..config import OAuthConfig
from ..errors import AuthError
from ..logging_utils import log_extra

_EXPIRY_LEEWAY_SECONDS = 30
_DEFAULT_EXPIRES_IN = 3600


class OAuthTokenProvider:
    """Client-credentials token source, cached until shortly before expiry."""

    def __init__(
        self,
        oauth: OAuthConfig,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ) -> None:
        self._oauth = oauth
        self._session = session or requests.Session()
        self._timeout = timeout
        self._token: str | None = None
        self._expires_at: float = 0.0
        self._lock = threading.Lock()
        self._log = logging.getLogger(__name__)

    def get_token(self) -> str:
        with self._lock:
            if self._token and time.time() < self._expires_at - _EXPIRY_LEEWAY_SECONDS:
                return self._token
            return self._refresh_token()

    def invalidate(self) -> None:
        with self._lock:
            self._token = None
            self._expires_at = 0.0

    def _refresh_token(self) -> str:
        data = {
            "grant_type": "client_credentials",
            "client_id": self._oauth.client_id,
            "client_secret": self._oauth.client_secret,
        }
        if self._oauth.scope:
            data["scope"] = self._oauth.scope

        try:
            response = self._session.post(
                self._oauth.token_url, data=data, timeout=self._timeout
            )
        except requests.RequestException as exc:
            self._log.warning(
                "Token endpoint unreachable",
                extra=log_extra(token_url=self._oauth.token_url, error_message=str(exc)),
            )
            raise AuthError("Failed to contact token endpoint") from exc

        if response.status_code != 200:
            raise AuthError(f"Token endpoint returned {response.status_code}")

        try:
            payload = response.json()
            token = payload["access_token"]
            expires_in = int(payload.get("expires_in", _DEFAULT_EXPIRES_IN))
        except (ValueError, KeyError, TypeError) as exc:
            raise AuthError("Invalid token response payload") from exc

        self._token = token
        self._expires_at = time.time() + expires_in
        self._log.debug("Refreshed access token", extra=log_extra(expires_in=expires_in))
        return token
