from __future__ import annotations

import datetime as dt
import html

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Prediction(BaseModel):
    """
    A single daily horoscope prediction for one zodiac sign.

    Immutable value object: two predictions with the same fields are equal.
    The prediction text arrives HTML-entity encoded from the API and is
    decoded on construction, so ``text`` passed in must be the encoded form.
    Validating already decoded text decodes it again: to rebuild a
    prediction from ``model_dump()`` output use ``model_construct`` or
    ``model_copy``, which skip validation.
    """

    model_config = ConfigDict(frozen=True)

    sign_id: int = Field(..., description="Upstream zodiac sign id")
    sign_name: str = Field(..., description="Upstream zodiac sign name")
    date: dt.date = Field(..., description="Day the prediction applies to")
    text: str = Field(..., description="Prediction text (HTML entities decoded)")

    # ------------------------------
    # Field Validators (Pydantic v2)
    # ------------------------------

    @field_validator("text", mode="before")
    @classmethod
    def unescape_text(cls, v):
        if isinstance(v, str):
            return html.unescape(v)
        return v

    @property
    def prediction(self) -> str:
        return self.text

    def format_date(self, fmt: str = "%Y-%m-%d") -> str:
        """Format the prediction date with strftime directives."""
        return self.date.strftime(fmt)
