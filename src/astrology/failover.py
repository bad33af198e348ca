"""
Astrology - Multi-credential failover

Astrology holds an ordered list of ProkeralaClient instances. Requests go to
the current client; when it is blocked or rate-limited (HTTP 403) the
coordinator moves to the next client, wrapping around, and retries.

Rotation state lives on the instance and carries over between calls: a new
call starts on whichever client the previous one ended on, and the lifetime
swap counter is never reset automatically. Once it reaches the number of
clients, a 403 fails the call without further rotation. Call
``reset_rotation()`` to clear it.

Instances are not thread-safe; use one per concurrent caller.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple, Union

from .api_fetcher.prokerala_api import ProkeralaClient
from .api_fetcher.schema import Prediction
from .config import AstrologySettings, load_settings_from_env
from .errors import (
    AllClientsBlockedError,
    AstrologyError,
    ConfigurationError,
    NoMatchingSignError,
    PredictionUnavailableError,
)
from .zodiac import ZodiacSign, resolve_sign

logger = logging.getLogger(__name__)

BLOCKED_STATUS = 403


def is_block_signal(error: BaseException) -> bool:
    """True when the failure is an upstream HTTP 403 (blocked / rate-limited)."""
    return getattr(error, "status_code", None) == BLOCKED_STATUS


class Astrology:
    """Daily predictions with automatic credential rotation on HTTP 403."""

    def __init__(
        self,
        client_ids: Union[str, Sequence[str]],
        client_secrets: Union[str, Sequence[str]],
        base_url: str = ProkeralaClient.DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
    ) -> None:
        if isinstance(client_ids, str):
            client_ids = [client_ids]
        if isinstance(client_secrets, str):
            client_secrets = [client_secrets]

        if len(client_ids) != len(client_secrets):
            raise ConfigurationError("The number of client IDs and client secrets must be equal.")
        if not client_ids:
            raise ConfigurationError("At least one client id/secret pair is required.")
        if timeout is not None and timeout <= 0:
            raise ConfigurationError(f"timeout must be greater than 0, got {timeout}.")
        if retries is not None and retries < 0:
            raise ConfigurationError(f"retries must be 0 or more, got {retries}.")

        clients = [
            ProkeralaClient(cid, secret, base_url=base_url, timeout=timeout, retries=retries)
            for cid, secret in zip(client_ids, client_secrets)
        ]
        self._init_rotation(clients)

    def _init_rotation(self, clients: Sequence[Any]) -> None:
        self._clients: Tuple[Any, ...] = tuple(clients)
        self.current_index = 0
        self.swap_count = 0

    @classmethod
    def from_clients(cls, clients: Sequence[Any]) -> "Astrology":
        """Build a coordinator around already constructed clients."""
        if not clients:
            raise ConfigurationError("At least one client is required.")
        coordinator = cls.__new__(cls)
        coordinator._init_rotation(clients)
        return coordinator

    @classmethod
    def from_settings(cls, settings: AstrologySettings) -> "Astrology":
        settings.validate()
        return cls(
            settings.client_ids,
            settings.client_secrets,
            base_url=settings.base_url,
            timeout=settings.timeout,
            retries=settings.retries,
        )

    @classmethod
    def from_env(cls) -> "Astrology":
        return cls.from_settings(load_settings_from_env())

    @property
    def clients(self) -> Tuple[Any, ...]:
        return self._clients

    def reset_rotation(self) -> None:
        self.swap_count = 0

    @staticmethod
    def _to_sign(target: Any) -> ZodiacSign:
        if isinstance(target, ZodiacSign):
            return target
        if isinstance(target, str):
            sign = ZodiacSign.from_name(target)
            if sign is None:
                raise NoMatchingSignError(f"Unknown zodiac sign: {target!r}")
            return sign
        return resolve_sign(target)

    def daily_prediction(self, target: Any) -> Prediction:
        """
        Fetch today's prediction for a sign, a sign name, a date, or a
        (month, day) pair.

        Raises:
            InvalidDateError: the date is outside [1, 12] x [1, 31].
            NoMatchingSignError: the sign name is unknown.
            AllClientsBlockedError: every client answered 403.
            PredictionUnavailableError: any other request failure.
        """
        sign = self._to_sign(target)
        n = len(self._clients)
        attempts = 0

        while True:
            client = self._clients[self.current_index]
            attempts += 1
            try:
                return client.fetch_prediction(sign)
            except AstrologyError as e:
                if not is_block_signal(e):
                    logger.error("Daily prediction failed on client %d: %s", self.current_index, e)
                    raise PredictionUnavailableError(f"Failed to get daily prediction. {e}") from e

                if self.swap_count >= n or attempts >= n:
                    logger.error(
                        "All API clients are blocked (attempts=%d, swaps=%d)",
                        attempts,
                        self.swap_count,
                    )
                    raise AllClientsBlockedError("All API clients are blocked.") from e

                previous = self.current_index
                self.swap_count += 1
                self.current_index = (self.current_index + 1) % n
                logger.warning(
                    "Client %d blocked (HTTP 403), switching to client %d (swap %d/%d)",
                    previous,
                    self.current_index,
                    self.swap_count,
                    n,
                )

    def close(self) -> None:
        for client in self._clients:
            close = getattr(client, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> "Astrology":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
