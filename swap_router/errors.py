"""Swap router error classes.

Every error raised by the quoting engine derives from RouterError. The
``status_code`` attribute is what the HTTP layer answers with.
"""


class RouterError(Exception):
    """Base error for routing and quoting operations."""

    status_code = 500


class InvalidInput(RouterError):
    """Request is malformed: same token twice, bad amounts, bad limits."""

    status_code = 400


class NoRouteFound(RouterError):
    """No complete path within max_hops, or every candidate was eliminated."""

    status_code = 404


class InsufficientLiquidity(RouterError):
    """Requested output would drain (or exceed) a pool's output reserve."""

    status_code = 422


class ExcessivePriceImpact(RouterError):
    """Best route moves the price more than the caller allows."""

    status_code = 422


class ExternalReadFailure(RouterError):
    """A pool reserve or token fee-profile read failed."""

    status_code = 502


class SearchCancelled(RouterError):
    """The caller cancelled an in-flight route search."""

    status_code = 499


__all__ = [
    "ExcessivePriceImpact",
    "ExternalReadFailure",
    "InsufficientLiquidity",
    "InvalidInput",
    "NoRouteFound",
    "RouterError",
    "SearchCancelled",
]
