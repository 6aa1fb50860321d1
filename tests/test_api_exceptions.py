"""Tests for Metabase API errors."""

import pytest

from metabase_migrate.api.exceptions import (
    MetabaseAPIError,
    MetabaseAuthenticationError,
    MetabaseNotFoundError,
    error_message,
)


class TestErrorMessage:
    """Test reading messages out of Metabase error bodies."""

    def test_message_key(self):
        """Test the message field is used as is."""
        assert error_message({'message': 'Card is archived'}, 'HTTP 400') == (
            'Card is archived'
        )

    def test_field_errors(self):
        """Test per-field errors are joined in order."""
        payload = {
            'errors': {
                'name': 'value must be a non-blank string.',
                'display': 'value must be a valid display.',
            }
        }

        assert error_message(payload, 'HTTP 400') == (
            'name: value must be a non-blank string.; '
            'display: value must be a valid display.'
        )

    def test_plain_string(self):
        """Test plain text bodies are stripped."""
        assert error_message('Unauthenticated\n', 'HTTP 401') == 'Unauthenticated'

    @pytest.mark.parametrize('payload', [None, '', '  ', {}, {'errors': {}}, [1, 2]])
    def test_default(self, payload):
        """Test unreadable bodies fall back to the default."""
        assert error_message(payload, 'HTTP 500') == 'HTTP 500'


class TestFromResponse:
    """Test building errors from failed responses."""

    @pytest.mark.parametrize(
        'status_code, error_class',
        [
            (401, MetabaseAuthenticationError),
            (403, MetabaseAuthenticationError),
            (404, MetabaseNotFoundError),
            (400, MetabaseAPIError),
            (500, MetabaseAPIError),
        ],
    )
    def test_status_selects_class(self, status_code, error_class):
        """Test each status maps onto its error class."""
        error = MetabaseAPIError.from_response(status_code, None)

        assert type(error) is error_class
        assert error.status_code == status_code

    def test_message_and_payload_kept(self):
        """Test the message names the endpoint and the body is kept."""
        payload = {'errors': {'name': 'value must be a non-blank string.'}}

        error = MetabaseAPIError.from_response(400, payload, endpoint='/card')

        assert str(error) == (
            'API request failed (/card: name: value must be a non-blank string.)'
        )
        assert error.response_data == payload

    def test_not_found_without_body(self):
        """Test a bare 404 still reads cleanly."""
        error = MetabaseAPIError.from_response(404, '', endpoint='/dashboard/9')

        assert str(error) == 'Resource not found (/dashboard/9: HTTP 404)'
        assert isinstance(error, MetabaseAPIError)
