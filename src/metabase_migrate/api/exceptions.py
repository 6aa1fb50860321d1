"""Errors raised for failed Metabase API calls."""

from typing import Any, Optional


def error_message(payload: Any, default: str) -> str:
    """Pull a readable message out of a Metabase error body.

    Metabase answers with ``{"message": ...}``, with per-field validation
    errors under ``{"errors": {...}}``, or with a bare string.
    """
    if isinstance(payload, dict):
        if payload.get('message'):
            return str(payload['message'])
        errors = payload.get('errors')
        if isinstance(errors, dict) and errors:
            return '; '.join(f'{field}: {reason}' for field, reason in errors.items())
        return default

    if isinstance(payload, str) and payload.strip():
        return payload.strip()

    return default


class MetabaseAPIError(Exception):
    """A Metabase API call failed.

    Attributes:
        status_code: HTTP status, ``None`` for network failures
        response_data: Error body returned by Metabase
    """

    summary = 'API request failed'

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data

    @classmethod
    def from_response(
        cls, status_code: int, payload: Any, endpoint: Optional[str] = None
    ) -> 'MetabaseAPIError':
        """Build the error matching a failed response.

        401 and 403 give ``MetabaseAuthenticationError``, 404 gives
        ``MetabaseNotFoundError``, anything else the base class.
        """
        if status_code in (401, 403):
            error_class = MetabaseAuthenticationError
        elif status_code == 404:
            error_class = MetabaseNotFoundError
        else:
            error_class = MetabaseAPIError

        message = error_message(payload, f'HTTP {status_code}')
        if endpoint:
            message = f'{endpoint}: {message}'

        return error_class(
            f'{error_class.summary} ({message})',
            status_code=status_code,
            response_data=payload,
        )


class MetabaseAuthenticationError(MetabaseAPIError):
    """Credentials or session were rejected."""

    summary = 'Authentication failed'


class MetabaseNotFoundError(MetabaseAPIError):
    """The entity addressed by the request does not exist."""

    summary = 'Resource not found'
