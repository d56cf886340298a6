"""Exception taxonomy — every failure is fatal to the run."""
from __future__ import annotations


class CoinbaseError(Exception):
    """Base class for all crypto-client failures."""


class TransportError(CoinbaseError):
    """The remote service could not be reached (DNS, connection, timeout)."""

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"request to {url} failed: {cause!r}")


class APIError(CoinbaseError):
    """The remote service answered with a non-200 status."""

    def __init__(self, status: int, body: str, url: str = "") -> None:
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"bad HTTP status return code: {status}\n{body}")


class DecodeError(CoinbaseError):
    """A response body does not have the expected shape."""

    def __init__(self, resource: str, reason: str) -> None:
        self.resource = resource
        self.reason = reason
        super().__init__(f"cannot decode {resource}: {reason}")


class NumericParseError(CoinbaseError, ValueError):
    """A monetary string could not be parsed as a number."""

    def __init__(self, value: object, field: str = "amount") -> None:
        self.value = value
        self.field = field
        super().__init__(f"invalid numeric value for {field}: {value!r}")
