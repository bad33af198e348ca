from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .schema import Prediction

logger = logging.getLogger(__name__)


def _extract_daily_prediction(payload: Any) -> Optional[Dict[str, Any]]:
    """
    Walk ``data.daily_prediction`` of the response body.
    Return None if any level is missing or not an object.
    """
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if not isinstance(data, dict):
        return None
    daily = data.get("daily_prediction")
    return daily if isinstance(daily, dict) else None


def normalize_daily_prediction(payload: Any) -> Optional[Prediction]:
    """
    Normalize a Prokerala ``/v2/horoscope/daily`` response body.

    Expected shape:
      {"data": {"daily_prediction": {
          "sign_id": 1, "sign_name": "Aries",
          "date": "2024-05-04", "prediction": "..."}}}

    Returns None when the body does not have that shape or a field fails
    validation, leaving the caller to decide how to report it.
    """
    daily = _extract_daily_prediction(payload)
    if daily is None:
        return None

    for key in ("sign_id", "sign_name", "date", "prediction"):
        if daily.get(key) is None:
            logger.debug("daily_prediction missing field %r", key)
            return None

    try:
        return Prediction(
            sign_id=daily["sign_id"],
            sign_name=str(daily["sign_name"]),
            date=daily["date"],
            text=daily["prediction"],
        )
    except ValidationError as e:
        logger.debug("daily_prediction failed validation: %s", e)
        return None
