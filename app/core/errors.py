"""TRIDASH — Error Taxonomy.

Every failure the aggregation layer can report is one of these. Adapters
raise them; the adapter base turns them into ``Failure`` results and the
routes turn results into HTTP responses.
"""

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Category of a failed provider panel."""

    AUTH_ERROR = "auth_error"
    CONFIG_ERROR = "config_error"
    QUERY_ERROR = "query_error"


class TridashError(Exception):
    """Base class for all TRIDASH errors."""

    kind: ErrorKind = ErrorKind.QUERY_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(TridashError):
    """The request carried no session token."""

    kind = ErrorKind.AUTH_ERROR


class ConfigurationError(TridashError):
    """Server-side credentials or mapping configuration are missing or invalid."""

    kind = ErrorKind.CONFIG_ERROR

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        self.missing = missing or []
        super().__init__(message)


class ProviderError(TridashError):
    """Raised when an external analytics provider rejects or fails a request."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        provider_message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.provider_message = provider_message
        super().__init__(message)


class ProviderAuthError(ProviderError):
    """Provider refused our credentials (401/403)."""

    kind = ErrorKind.AUTH_ERROR


class ProviderQueryError(ProviderError):
    """Provider rejected the query, was unreachable, or timed out."""

    kind = ErrorKind.QUERY_ERROR
