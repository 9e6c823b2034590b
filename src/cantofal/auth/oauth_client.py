"""OAuth client utilities for cantofal (client-credentials grant)."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from google.auth import credentials as ga_credentials
from google.auth import exceptions as ga_exceptions
from google.auth.transport.requests import AuthorizedSession, Request

from cantofal.errors import AuthorizationFailedError, InvalidConfigurationError

from .config import CantoConfig

logger = logging.getLogger(__name__)

# Used when the token response does not say how long the token lives.
_DEFAULT_TOKEN_LIFETIME_SEC: int = 3600


def _utcnow() -> datetime:
    # google-auth compares expiry against naive UTC datetimes.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CantoCredentials(ga_credentials.Credentials):
    """
    Bearer-token credentials for a Canto app (app_id + app_secret).

    `refresh` performs the client-credentials grant against the OAuth endpoint
    of the configured domain. google-auth calls it before a request whenever the
    token is missing or expired.
    """

    def __init__(self, config: CantoConfig) -> None:
        super().__init__()
        self._config = config
        self.refresh_token: str | None = None

    def refresh(self, request) -> None:
        query = urlencode(
            {
                "app_id": self._config.app_id,
                "app_secret": self._config.app_secret,
                "grant_type": "client_credentials",
            }
        )
        url = f"{self._config.token_url}?{query}"
        logger.debug(f"Requesting Canto access token from {self._config.token_url}")
        try:
            response = request(url=url, method="POST", timeout=self._config.timeout)
        except ga_exceptions.TransportError as exc:
            raise ga_exceptions.RefreshError(f"Token request failed: {exc}") from exc

        if response.status != 200:
            raise ga_exceptions.RefreshError(
                f"Token request rejected with HTTP {response.status}"
            )

        try:
            payload = json.loads(response.data.decode("utf-8"))
        except (ValueError, UnicodeDecodeError) as exc:
            raise ga_exceptions.RefreshError("Token response is not JSON") from exc

        token = payload.get("accessToken") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise ga_exceptions.RefreshError("Token response has no accessToken")

        try:
            lifetime = int(payload.get("expiresIn", _DEFAULT_TOKEN_LIFETIME_SEC))
        except (TypeError, ValueError):
            lifetime = _DEFAULT_TOKEN_LIFETIME_SEC

        self.token = token
        self.expiry = _utcnow() + timedelta(seconds=lifetime)
        refresh_token = payload.get("refreshToken")
        self.refresh_token = refresh_token if isinstance(refresh_token, str) else None


class OAuthClient:
    """Create Canto credentials and authorized HTTP sessions."""

    def __init__(self, config: CantoConfig) -> None:
        if not config.is_valid:
            raise InvalidConfigurationError(
                "OAuthClient requires a valid configuration",
                details={"problems": config.problems()},
            )
        self._config = config

    def get_credentials(self, ensure_valid: bool = True) -> CantoCredentials:
        """
        Return credentials for the configured app.

        Args:
            ensure_valid: If True, fetch a token right away so bad credentials
                surface here rather than on the first API call.

        Raises:
            AuthorizationFailedError: if the token request fails.
        """
        creds = CantoCredentials(self._config)
        if not ensure_valid:
            return creds

        try:
            creds.refresh(Request())
        except ga_exceptions.RefreshError as exc:
            raise AuthorizationFailedError(
                "Failed to obtain a Canto access token",
                details={"canto_domain": self._config.canto_domain},
                cause=exc,
            ) from exc
        return creds

    def build_session(self, ensure_valid: bool = True) -> AuthorizedSession:
        """Build a requests session that attaches and refreshes the bearer token."""
        creds = self.get_credentials(ensure_valid=ensure_valid)
        return AuthorizedSession(creds)
