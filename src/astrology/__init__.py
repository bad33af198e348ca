"""
Astrology - Daily horoscope predictions from the Prokerala API.

Usage:
    from astrology import Astrology, ZodiacSign

    api = Astrology(["CLIENT_ID_1", "CLIENT_ID_2"], ["SECRET_1", "SECRET_2"])
    print(api.daily_prediction(ZodiacSign.ARIES).text)
    print(api.daily_prediction((5, 4)).text)   # resolves to Taurus
"""

from .api_fetcher.schema import Prediction
from .config import AstrologySettings, load_settings_from_env, load_settings_from_yaml
from .errors import (
    AllClientsBlockedError,
    AstrologyError,
    AuthenticationFailedError,
    ConfigurationError,
    InvalidDateError,
    NoMatchingSignError,
    PredictionRequestFailedError,
    PredictionUnavailableError,
)
from .failover import Astrology
from .zodiac import ZodiacSign, resolve_sign

__all__ = [
    "Astrology",
    "AstrologySettings",
    "Prediction",
    "ZodiacSign",
    "resolve_sign",
    "load_settings_from_env",
    "load_settings_from_yaml",
    # Errors
    "AstrologyError",
    "InvalidDateError",
    "NoMatchingSignError",
    "ConfigurationError",
    "AuthenticationFailedError",
    "PredictionRequestFailedError",
    "AllClientsBlockedError",
    "PredictionUnavailableError",
]
