"""
Astrology - API Fetcher Module

HTTP clients for the Prokerala astrology API.

Usage:
------
    from astrology.api_fetcher import ProkeralaClient
    from astrology.zodiac import ZodiacSign

    client = ProkeralaClient("CLIENT_ID", "CLIENT_SECRET")
    prediction = client.fetch_prediction(ZodiacSign.ARIES)
    print(prediction.text)

A ProkeralaClient talks to one credential only. For rotation across several
credentials use ``astrology.Astrology``.
"""

# -----------------------------------------------------------------------------
# Base client
# -----------------------------------------------------------------------------
from .client_base import (
    BaseAPIClient,
    APIClientError,
    APIClientHTTPError,
    APIClientTimeout,
)

# -----------------------------------------------------------------------------
# OAuth2 client-credentials token handling
# -----------------------------------------------------------------------------
from .token_manager import Credential, TokenManager, TokenState

# -----------------------------------------------------------------------------
# Prokerala daily prediction client
# -----------------------------------------------------------------------------
from .prokerala_api import ProkeralaClient

# -----------------------------------------------------------------------------
# Response normalization and schema
# -----------------------------------------------------------------------------
from .normalizer import normalize_daily_prediction
from .schema import Prediction


__all__ = [
    # Base client
    "BaseAPIClient",
    "APIClientError",
    "APIClientHTTPError",
    "APIClientTimeout",
    # Tokens
    "Credential",
    "TokenManager",
    "TokenState",
    # Prokerala client
    "ProkeralaClient",
    # Normalizer
    "normalize_daily_prediction",
    # Schema
    "Prediction",
]
