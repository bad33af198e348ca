import datetime as dt

import pytest
from pydantic import ValidationError

from astrology.api_fetcher.normalizer import normalize_daily_prediction
from astrology.api_fetcher.schema import Prediction


def _payload(**overrides):
    daily = {
        "sign_id": 2,
        "sign_name": "Taurus",
        "date": "2024-05-04",
        "prediction": "Stay calm &ndash; it&#39;s a good day.",
    }
    daily.update(overrides)
    return {"status": "ok", "data": {"daily_prediction": daily}}


@pytest.mark.unit
def test_normalizer_builds_prediction_from_export_shape():
    prediction = normalize_daily_prediction(_payload())
    assert isinstance(prediction, Prediction)

    d = prediction.model_dump()
    assert d["sign_id"] == 2
    assert d["sign_name"] == "Taurus"
    assert d["date"] == dt.date(2024, 5, 4)
    assert d["text"] == "Stay calm – it's a good day."


@pytest.mark.unit
def test_normalizer_wrong_shapes_return_none():
    assert normalize_daily_prediction({}) is None
    assert normalize_daily_prediction({"data": None}) is None
    assert normalize_daily_prediction({"data": {"daily_prediction": []}}) is None
    assert normalize_daily_prediction("not a dict") is None


@pytest.mark.unit
@pytest.mark.parametrize("missing", ["sign_id", "sign_name", "date", "prediction"])
def test_normalizer_missing_field_returns_none(missing):
    payload = _payload()
    del payload["data"]["daily_prediction"][missing]
    assert normalize_daily_prediction(payload) is None


@pytest.mark.unit
def test_normalizer_bad_date_returns_none():
    assert normalize_daily_prediction(_payload(date="04/05/2024")) is None


@pytest.mark.unit
def test_prediction_unescapes_html_on_construction():
    p = Prediction(sign_id=1, sign_name="Aries", date=dt.date(2024, 5, 4), text="Today is &amp; great")
    assert p.text == "Today is & great"
    assert p.prediction == "Today is & great"


@pytest.mark.unit
def test_prediction_is_immutable_value_object():
    a = Prediction(sign_id=1, sign_name="Aries", date="2024-05-04", text="x")
    b = Prediction(sign_id=1, sign_name="Aries", date=dt.date(2024, 5, 4), text="x")
    assert a == b

    with pytest.raises(ValidationError):
        a.text = "changed"


@pytest.mark.unit
def test_prediction_format_date():
    p = Prediction(sign_id=1, sign_name="Aries", date="2024-05-04", text="x")
    assert p.format_date() == "2024-05-04"
    assert p.format_date("%d.%m.%Y") == "04.05.2024"


@pytest.mark.unit
def test_prediction_copy_keeps_decoded_text_but_revalidation_decodes_again():
    p = Prediction(sign_id=1, sign_name="Aries", date="2024-05-04", text="a &amp;amp; b")
    assert p.text == "a &amp; b"

    assert p.model_copy().text == "a &amp; b"
    assert Prediction.model_construct(**p.model_dump()).text == "a &amp; b"
    # validation always treats text as encoded
    assert Prediction.model_validate(p.model_dump()).text == "a & b"
