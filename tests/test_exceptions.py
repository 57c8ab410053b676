"""Tests for the request-error and validation-error families."""

from __future__ import annotations

import pytest

from market_analysis.exceptions import (
    AnalysisValidationError,
    BadRequest,
    BadResponse,
    DateOrderInverted,
    NotFound,
    ProviderUnavailable,
    RateLimited,
    RequestError,
    Unauthorized,
)


@pytest.mark.parametrize(
    "exc_type, code",
    [
        (BadRequest, "INVALID_INPUT"),
        (NotFound, "TICKER_NOT_FOUND"),
        (Unauthorized, "UNAUTHORIZED"),
        (RateLimited, "RATE_LIMIT_EXCEEDED"),
        (ProviderUnavailable, "PROVIDER_UNAVAILABLE"),
        (BadResponse, "BAD_RESPONSE"),
    ],
)
def test_request_errors_carry_codes(exc_type, code):
    err = exc_type("boom")
    assert isinstance(err, RequestError)
    assert not isinstance(err, AnalysisValidationError)
    assert err.error_code == code


def test_families_are_independent():
    """A caller catching request failures never swallows validation failures."""
    with pytest.raises(AnalysisValidationError):
        try:
            raise DateOrderInverted("dates")
        except RequestError:
            pytest.fail("validation error caught as request error")
