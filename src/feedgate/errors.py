from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    UPSTREAM_FETCH_FAILED = "UPSTREAM_FETCH_FAILED"
    UPSTREAM_BAD_RESPONSE = "UPSTREAM_BAD_RESPONSE"
    AGGREGATION_FAILED = "AGGREGATION_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class FeedgateError(Exception):
    """Raised for all expected failure conditions.

    Caught by server.py and serialised into the JSON error envelope.
    Business logic lets it propagate so the client receives a structured
    error with a suggestion.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class UpstreamFetchError(FeedgateError):
    """An upstream call or a whole aggregation failed.

    Raised by the Fetcher for a single failed request and by the aggregators
    when a failure cannot be absorbed as an empty contribution. Never cached.
    """

    def __init__(
        self,
        source: str,
        message: str,
        *,
        code: ErrorCode = ErrorCode.UPSTREAM_FETCH_FAILED,
        suggestion: str = "The upstream source may be temporarily unavailable. Try again later.",
        recoverable: bool = True,
    ) -> None:
        super().__init__(code, message, suggestion, recoverable)
        self.source = source

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["error"]["source"] = self.source
        return payload
