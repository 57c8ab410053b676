"""Domain-specific exceptions.

Two independent families: ``RequestError`` for a provider that failed to
obtain data, and ``AnalysisValidationError`` for an aggregate whose fields
are logically inconsistent.
"""


class RequestError(RuntimeError):
    """Raised when a provider could not obtain the requested data."""

    error_code = "REQUEST_FAILED"


class BadRequest(RequestError):
    error_code = "INVALID_INPUT"


class NotFound(RequestError):
    """The provider does not know the requested symbol."""

    error_code = "TICKER_NOT_FOUND"


class Unauthorized(RequestError):
    """For remote adapters whose credentials the data source rejected."""

    error_code = "UNAUTHORIZED"


class RateLimited(RequestError):
    """For remote adapters throttled by the data source. This layer never retries."""

    error_code = "RATE_LIMIT_EXCEEDED"


class ProviderUnavailable(RequestError):
    """The underlying data source could not be reached or read."""

    error_code = "PROVIDER_UNAVAILABLE"


class BadResponse(RequestError):
    """The data source answered with content that could not be parsed."""

    error_code = "BAD_RESPONSE"


class AnalysisValidationError(ValueError):
    """Raised by ``validate()`` when an aggregate breaks a business rule."""

    error_code = "INVALID_AGGREGATE"


class RangeInverted(AnalysisValidationError):
    error_code = "RANGE_INVERTED"


class AverageOutOfBounds(AnalysisValidationError):
    error_code = "AVERAGE_OUT_OF_BOUNDS"


class NoAnalysts(AnalysisValidationError):
    error_code = "NO_ANALYSTS"


class DateOrderInverted(AnalysisValidationError):
    error_code = "DATE_ORDER_INVERTED"


class NoEstimates(AnalysisValidationError):
    error_code = "NO_ESTIMATES"
