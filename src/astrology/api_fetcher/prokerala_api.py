from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ..errors import PredictionRequestFailedError
from ..zodiac import ZodiacSign, resolve_sign
from .client_base import APIClientError, APIClientHTTPError, BaseAPIClient
from .normalizer import normalize_daily_prediction
from .schema import Prediction
from .token_manager import Clock, Credential, TokenManager, utc_now


logger = logging.getLogger(__name__)


def utc_instant(now: datetime) -> str:
    """ISO-8601 UTC instant with a trailing Z, e.g. 2024-05-04T09:30:00Z."""
    return now.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


class ProkeralaClient(BaseAPIClient):
    """
    Daily horoscope client bound to one Prokerala credential.

    Uses BaseAPIClient for all HTTP calls and a TokenManager sharing the
    same session for the bearer token. Each call makes one prediction
    request, plus one token request when the cached token is missing or
    expired.
    """

    DEFAULT_BASE_URL = "https://api.prokerala.com"
    TOKEN_ENDPOINT = "/token"
    DAILY_PREDICTION_ENDPOINT = "/v2/horoscope/daily"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout, retries=retries)
        self.clock: Clock = clock or utc_now
        self.token_manager = TokenManager(
            Credential(client_id, client_secret),
            http=self,
            token_endpoint=self.TOKEN_ENDPOINT,
            clock=self.clock,
        )

    @property
    def client_id(self) -> str:
        return self.token_manager.credential.client_id

    @property
    def token_endpoint(self) -> str:
        return self._url(self.TOKEN_ENDPOINT)

    @property
    def daily_prediction_endpoint(self) -> str:
        return self._url(self.DAILY_PREDICTION_ENDPOINT)

    # -------------------------------------------------
    # Public method
    # -------------------------------------------------
    def fetch_prediction(self, sign: Any) -> Prediction:
        """
        Fetch today's prediction for ``sign``.

        ``sign`` is a ZodiacSign, or a date / (month, day) pair which is
        resolved to its sign first.

        Raises:
            AuthenticationFailedError: the token could not be obtained.
            PredictionRequestFailedError: the prediction request failed or
                returned an unexpected body.
        """
        if not isinstance(sign, ZodiacSign):
            sign = resolve_sign(sign)

        token, _expires_at = self.token_manager.get_valid_token()

        params = {
            "sign": sign.api_name,
            "datetime": utc_instant(self.clock()),
        }
        logger.info("Fetching daily prediction for %s (client %s)", sign.api_name, self.client_id)

        try:
            data = self.get_json(
                self.DAILY_PREDICTION_ENDPOINT,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except APIClientHTTPError as e:
            raise PredictionRequestFailedError(
                f"Failed to get daily prediction. Response code: {e.status_code}",
                status_code=e.status_code,
            ) from e
        except APIClientError as e:
            raise PredictionRequestFailedError(
                f"Failed to get daily prediction. {e}"
            ) from e

        prediction = normalize_daily_prediction(data)
        if prediction is None:
            raise PredictionRequestFailedError(
                "Unexpected daily prediction response shape; expected "
                "object with data.daily_prediction.",
                status_code=200,
            )
        return prediction
