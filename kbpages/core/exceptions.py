# kbpages/core/exceptions.py
"""Exception types raised by the query, paging and distinct-value layers."""

from typing import Optional


class KBPagesError(Exception):
    """Base class for all kbpages errors."""
    pass


class UnknownColumnTypeError(KBPagesError, ValueError):
    """A semantic column type tag is not in the registry (strict mode only)."""

    def __init__(self, type_tag: str):
        super().__init__(f"Unknown column type: {type_tag!r}")
        self.type_tag = type_tag


class QueryCompilationError(KBPagesError, ValueError):
    """A filter value cannot be encoded for its column's declared type."""

    def __init__(self, column: str, value: str, reason: str):
        super().__init__(f"Cannot filter column '{column}' on {value!r}: {reason}")
        self.column = column
        self.value = value


class GatewayError(KBPagesError):
    """The remote store could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class MalformedResponseError(GatewayError):
    """The remote store answered, but not with the payload shape we expect."""
    pass
