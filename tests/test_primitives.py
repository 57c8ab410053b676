"""Tests for symbols, snapshots and bounded values."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from market_analysis.exceptions import BadRequest, RequestError
from market_analysis.schemas import RangedRatings, RatingType, TimestampedPriceTarget
from market_analysis.schemas.primitives import normalize_symbol


def test_normalize_symbol():
    assert normalize_symbol(" alph ") == "ALPH"
    assert normalize_symbol("brk.b") == "BRK.B"


@pytest.mark.parametrize("bad", ["", "   ", None])
def test_normalize_symbol_rejects_blank(bad):
    with pytest.raises(BadRequest) as ctx:
        normalize_symbol(bad)
    assert isinstance(ctx.value, RequestError)
    assert ctx.value.error_code == "INVALID_INPUT"


def test_snapshot_of_price_target():
    snap = TimestampedPriceTarget.model_validate(
        {
            "as_of": "2024-06-05T12:00:00Z",
            "value": {"high": 10, "low": 5, "average": 7, "number_of_analysts": 2},
        }
    )
    assert snap.as_of == datetime(2024, 6, 5, 12, tzinfo=timezone.utc)
    assert snap.value.is_valid()


def test_bounded_ratings():
    ranged = RangedRatings.model_validate(
        {"start": "2024-06-01", "end": "2024-06-30", "value": {"ratings": {"hold": 2}}}
    )
    assert ranged.start == date(2024, 6, 1)
    assert ranged.end == date(2024, 6, 30)
    assert ranged.value.ratings == {RatingType.HOLD: 2}
