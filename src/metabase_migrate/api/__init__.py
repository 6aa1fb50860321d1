"""Metabase API client."""

from .client import APIResponse, MetabaseClient, MetabaseClientFactory
from .exceptions import (
    MetabaseAPIError,
    MetabaseAuthenticationError,
    MetabaseNotFoundError,
)

__all__ = [
    'APIResponse',
    'MetabaseClient',
    'MetabaseClientFactory',
    'MetabaseAPIError',
    'MetabaseAuthenticationError',
    'MetabaseNotFoundError',
]
