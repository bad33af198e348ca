"""
Astrology - OAuth2 Token Manager

Holds one client-credentials pair and the access token issued for it.
The token is fetched lazily: the first call authenticates, later calls reuse
the cached token until it expires, then authenticate again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from ..errors import AuthenticationFailedError
from .client_base import APIClientError, APIClientHTTPError, BaseAPIClient

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Credential:
    """An opaque client id / client secret pair."""

    client_id: str
    client_secret: str = field(repr=False)


@dataclass
class TokenState:
    access_token: Optional[str] = None
    expires_at: Optional[datetime] = None

    def is_valid(self, now: datetime) -> bool:
        if self.access_token is None or self.expires_at is None:
            return False
        return now < self.expires_at


class TokenManager:
    """
    Lazily refreshed bearer token for a single credential.

    Authentication failures are raised, never retried here; the failover
    layer decides whether to try another credential.
    """

    DEFAULT_TOKEN_ENDPOINT = "/token"

    def __init__(
        self,
        credential: Credential,
        http: BaseAPIClient,
        token_endpoint: str = DEFAULT_TOKEN_ENDPOINT,
        clock: Optional[Clock] = None,
    ) -> None:
        self.credential = credential
        self.http = http
        self.token_endpoint = token_endpoint
        self.clock: Clock = clock or utc_now
        self.state = TokenState()

    def get_valid_token(self) -> Tuple[str, datetime]:
        """
        Return ``(access_token, expires_at)``, authenticating first when no
        token is held or the held one has expired.

        Raises:
            AuthenticationFailedError: token endpoint returned non-200, was
                unreachable, or answered with an unusable body.
        """
        if self.state.is_valid(self.clock()):
            logger.debug("Reusing cached token for client %s", self.credential.client_id)
            return self.state.access_token, self.state.expires_at  # type: ignore[return-value]

        return self.refresh()

    def refresh(self) -> Tuple[str, datetime]:
        """Request a new access token, replace the held state and return it."""
        logger.info("Authenticating client %s", self.credential.client_id)

        try:
            body = self.http.post_form(
                self.token_endpoint,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.credential.client_id,
                    "client_secret": self.credential.client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except APIClientHTTPError as e:
            raise AuthenticationFailedError(
                f"Failed to authenticate. Response code: {e.status_code}",
                status_code=e.status_code,
            ) from e
        except APIClientError as e:
            raise AuthenticationFailedError(f"Failed to authenticate. {e}") from e

        if not isinstance(body, dict):
            raise AuthenticationFailedError(
                "Failed to authenticate. Token response is not an object", status_code=200
            )

        access_token = body.get("access_token")
        expires_in = body.get("expires_in")
        if not isinstance(access_token, str) or not access_token:
            raise AuthenticationFailedError(
                "Failed to authenticate. Token response has no access_token", status_code=200
            )
        try:
            expires_in_sec = int(expires_in)
        except (TypeError, ValueError) as e:
            raise AuthenticationFailedError(
                f"Failed to authenticate. Invalid expires_in: {expires_in!r}", status_code=200
            ) from e

        expires_at = self.clock() + timedelta(seconds=expires_in_sec)
        self.state = TokenState(access_token=access_token, expires_at=expires_at)
        logger.debug(
            "Token for client %s valid until %s",
            self.credential.client_id,
            expires_at.isoformat(),
        )
        return access_token, expires_at

    def invalidate(self) -> None:
        self.state = TokenState()
