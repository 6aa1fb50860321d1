"""Metabase API client implementation."""

import asyncio
import json
from typing import Any, Dict, List, Optional

import aiohttp
import requests
from loguru import logger
from pydantic import BaseModel

from ..config.config import MetabaseInstanceConfig
from ..models.card import Card
from ..models.collection import Collection
from ..models.dashboard import Dashboard, DashboardCard
from .exceptions import (
    MetabaseAPIError,
    MetabaseAuthenticationError,
    error_message,
)

USER_AGENT = 'metabase-migrate/0.1.0'


class APIResponse(BaseModel):
    """Standard API response wrapper."""

    status_code: int
    data: Any
    headers: Dict[str, str]
    success: bool


def _response_payload(response: requests.Response) -> Any:
    """Decoded JSON body of a response, or its raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class MetabaseClient:
    """Metabase API client with authentication."""

    def __init__(self, config: MetabaseInstanceConfig):
        """Initialize Metabase client.

        Args:
            config: Metabase instance configuration
        """
        self.config = config
        self.base_url = config.url.rstrip('/') + '/api'
        self.session = requests.Session()
        self.session_token: Optional[str] = None

        if config.api_key:
            self.session.headers.update({'X-API-KEY': config.api_key})
        elif not (config.username and config.password):
            raise MetabaseAuthenticationError('No authentication credentials provided')

        self.session.headers.update(
            {'Content-Type': 'application/json', 'User-Agent': USER_AGENT}
        )

        logger.info(f'Initialized Metabase client for {config.url}')

    def _build_url(self, endpoint: str) -> str:
        """Build full API URL from endpoint."""
        return f'{self.base_url}/{endpoint.lstrip("/")}'

    def login(self) -> str:
        """Open a session with username and password.

        Returns:
            Session token

        Raises:
            MetabaseAuthenticationError: If the credentials are rejected
        """
        try:
            response = self.session.post(
                self._build_url('/session'),
                json={
                    'username': self.config.username,
                    'password': self.config.password,
                },
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f'Network error during login: {e}')
            raise MetabaseAPIError(f'Network error: {e}')

        if response.status_code >= 400:
            payload = _response_payload(response)
            reason = error_message(payload, f'HTTP {response.status_code}')
            raise MetabaseAuthenticationError(
                f'Login failed for {self.config.username}: {reason}',
                status_code=response.status_code,
                response_data=payload,
            )

        self.session_token = response.json()['id']
        self.session.headers.update({'X-Metabase-Session': self.session_token})
        logger.info(f'Logged in to {self.config.url} as {self.config.username}')
        return self.session_token

    def _ensure_authenticated(self) -> None:
        """Log in once when no API key is configured."""
        if not self.config.api_key and self.session_token is None:
            self.login()

    def _auth_headers(self) -> Dict[str, str]:
        """Headers for requests made outside the requests session.

        Never logs in: session clients must call ``login()`` before the
        event loop starts.

        Raises:
            MetabaseAuthenticationError: If no session has been opened
        """
        if not self.config.api_key and self.session_token is None:
            raise MetabaseAuthenticationError(
                'Not logged in, call login() before making async requests'
            )
        headers = {'Content-Type': 'application/json', 'User-Agent': USER_AGENT}
        if self.config.api_key:
            headers['X-API-KEY'] = self.config.api_key
        else:
            headers['X-Metabase-Session'] = self.session_token
        return headers

    def _handle_response(
        self, response: requests.Response, endpoint: Optional[str] = None
    ) -> APIResponse:
        """Handle API response and convert to standard format.

        Raises:
            MetabaseAPIError: For various API errors
        """
        headers = dict(response.headers)

        if response.status_code >= 400:
            raise MetabaseAPIError.from_response(
                response.status_code, _response_payload(response), endpoint
            )

        try:
            data = response.json() if response.content else None
        except ValueError:
            data = response.text

        return APIResponse(
            status_code=response.status_code,
            data=data,
            headers=headers,
            success=200 <= response.status_code < 300,
        )

    def _request(
        self, method: str, endpoint: str, **kwargs
    ) -> APIResponse:
        """Make a synchronous API request."""
        self._ensure_authenticated()
        url = self._build_url(endpoint)

        try:
            response = getattr(self.session, method)(
                url, timeout=self.config.timeout, **kwargs
            )
            return self._handle_response(response, endpoint)
        except requests.RequestException as e:
            logger.error(f'Network error during {method.upper()} request: {e}')
            raise MetabaseAPIError(f'Network error: {e}')

    def get(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> APIResponse:
        """Make GET request."""
        return self._request('get', endpoint, params=params, **kwargs)

    def post(
        self, endpoint: str, data: Optional[Any] = None, **kwargs
    ) -> APIResponse:
        """Make POST request."""
        return self._request('post', endpoint, json=data, **kwargs)

    def put(
        self, endpoint: str, data: Optional[Any] = None, **kwargs
    ) -> APIResponse:
        """Make PUT request."""
        return self._request('put', endpoint, json=data, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> APIResponse:
        """Make DELETE request."""
        return self._request('delete', endpoint, **kwargs)

    async def _make_request_async(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
        **kwargs,
    ) -> APIResponse:
        """Make asynchronous API request.

        Args:
            method: HTTP method
            endpoint: API endpoint
            params: Query parameters
            data: Request body data
            **kwargs: Additional request arguments

        Returns:
            API response
        """
        url = self._build_url(endpoint)
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)

        async with aiohttp.ClientSession(
            headers=self._auth_headers(), timeout=timeout
        ) as session:
            try:
                async with session.request(
                    method=method, url=url, params=params, json=data, **kwargs
                ) as response:
                    response_headers = dict(response.headers)
                    response_text = await response.text()

                    try:
                        response_data = (
                            json.loads(response_text) if response_text else None
                        )
                    except ValueError:
                        response_data = response_text

                    if response.status >= 400:
                        raise MetabaseAPIError.from_response(
                            response.status, response_data, endpoint
                        )

                    return APIResponse(
                        status_code=response.status,
                        data=response_data,
                        headers=response_headers,
                        success=200 <= response.status < 300,
                    )

            except aiohttp.ClientError as e:
                logger.error(f'Network error during API request: {e}')
                raise MetabaseAPIError(f'Network error: {e}')

    async def get_async(
        self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs
    ) -> APIResponse:
        """Make asynchronous GET request."""
        return await self._make_request_async('GET', endpoint, params=params, **kwargs)

    async def post_async(
        self, endpoint: str, data: Optional[Any] = None, **kwargs
    ) -> APIResponse:
        """Make asynchronous POST request."""
        return await self._make_request_async('POST', endpoint, data=data, **kwargs)

    async def put_async(
        self, endpoint: str, data: Optional[Any] = None, **kwargs
    ) -> APIResponse:
        """Make asynchronous PUT request."""
        return await self._make_request_async('PUT', endpoint, data=data, **kwargs)

    async def delete_async(self, endpoint: str, **kwargs) -> APIResponse:
        """Make asynchronous DELETE request."""
        return await self._make_request_async('DELETE', endpoint, **kwargs)

    # Source side

    async def get_all_collections(self) -> List[Collection]:
        """Get every collection of the instance.

        The synthetic root collection (id ``"root"``) is skipped.
        """
        response = await self.get_async('/collection')
        collections = [
            Collection(**item)
            for item in response.data
            if isinstance(item.get('id'), int)
        ]
        logger.info(f'Retrieved {len(collections)} collections')
        return collections

    async def get_all_cards(self) -> List[Card]:
        """Get every card of the instance."""
        response = await self.get_async('/card')
        cards = [Card(**item) for item in response.data]
        logger.info(f'Retrieved {len(cards)} cards')
        return cards

    async def get_dashboard(self, dashboard_id: int) -> Dashboard:
        """Get one dashboard with its dashboard cards."""
        response = await self.get_async(f'/dashboard/{dashboard_id}')
        return Dashboard(**response.data)

    async def get_all_dashboards(self) -> List[Dashboard]:
        """Get every dashboard of the instance, fully hydrated.

        The listing endpoint omits dashboard cards, so each dashboard is
        fetched again individually.
        """
        response = await self.get_async('/dashboard')
        dashboard_ids = [item['id'] for item in response.data]
        semaphore = asyncio.Semaphore(self.config.max_concurrent_requests)

        async def fetch(dashboard_id: int) -> Dashboard:
            async with semaphore:
                return await self.get_dashboard(dashboard_id)

        dashboards = await asyncio.gather(
            *(fetch(dashboard_id) for dashboard_id in dashboard_ids)
        )
        logger.info(f'Retrieved {len(dashboards)} dashboards')
        return list(dashboards)

    async def get_all_database_ids(self) -> List[int]:
        """Get the ids of every database connected to the instance."""
        response = await self.get_async('/database')
        databases = response.data
        if isinstance(databases, dict):
            databases = databases.get('data', [])
        return [database['id'] for database in databases]

    # Destination side

    async def create_collection(self, collection: Collection) -> Collection:
        """Create a collection and return it as stored by the server."""
        response = await self.post_async(
            '/collection', data=collection.model_dump(mode='json')
        )
        return Collection(**response.data)

    async def create_card(self, card: Card) -> None:
        """Create a card; its id is replaced by the server-assigned one."""
        response = await self.post_async('/card', data=card.model_dump(mode='json'))
        card.id = Card(**response.data).id
        await self.put_async(f'/card/{card.id}', data=card.model_dump(mode='json'))

    async def create_dashboard(self, dashboard: Dashboard) -> None:
        """Create a dashboard; its id is replaced by the server-assigned one."""
        response = await self.post_async(
            '/dashboard', data=dashboard.model_dump(mode='json')
        )
        dashboard.id = Dashboard(**response.data).id
        await self.put_async(
            f'/dashboard/{dashboard.id}', data=dashboard.model_dump(mode='json')
        )

    async def add_cards_to_dashboard(
        self, dashboard_id: int, dashcards: List[DashboardCard]
    ) -> None:
        """Place cards on a dashboard, then push their layout and mappings.

        Text tiles (no ``card_id``) keep their exported id.
        """
        for dashcard in dashcards:
            if dashcard.card_id is None:
                continue
            response = await self.post_async(
                f'/dashboard/{dashboard_id}/cards',
                data={'cardId': int(dashcard.card_id)},
            )
            dashcard.id = DashboardCard(**response.data).id

        await self.put_async(
            f'/dashboard/{dashboard_id}/cards',
            data={'cards': [dashcard.model_dump(mode='json') for dashcard in dashcards]},
        )

    async def delete_card(self, card_id: int) -> None:
        """Delete a card."""
        await self.delete_async(f'/card/{card_id}')

    async def delete_dashboard(self, dashboard_id: int) -> None:
        """Delete a dashboard."""
        await self.delete_async(f'/dashboard/{dashboard_id}')

    def test_connection(self) -> bool:
        """Test connection to the Metabase instance.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            response = self.get('/user/current')
            return response.success
        except Exception as e:
            logger.error(f'Connection test failed: {e}')
            return False

    def close(self):
        """Close the client session."""
        self.session.close()
        logger.info('Metabase client session closed')

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


class MetabaseClientFactory:
    """Factory for creating Metabase API clients."""

    @staticmethod
    def create_client(config: MetabaseInstanceConfig) -> MetabaseClient:
        """Create Metabase client from configuration.

        Clients without an API key log in here, so the session token is in
        place before any async request reads it.

        Raises:
            MetabaseAuthenticationError: If authentication configuration is invalid
        """
        if not config.api_key and not (config.username and config.password):
            raise MetabaseAuthenticationError(
                'Either api_key or username and password must be provided'
            )

        client = MetabaseClient(config)
        if not config.api_key:
            client.login()
        return client
