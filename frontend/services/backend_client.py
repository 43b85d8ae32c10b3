"""
Backend API Client for the Pizzeria Frontend.

Provides type-safe access to the order backend with error handling.
Idempotent requests (GET) are retried on server errors; order submissions
(POST) are sent exactly once.
"""

import json
import logging
import threading
from typing import Optional, Dict, Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from frontend.config.settings import config
from frontend.utils.exceptions import APIError, BackendUnavailableError
from frontend.utils.form_state import PizzaOrder, SubmissionResult, ToppingCatalog

logger = logging.getLogger(__name__)


class PizzaAPIClient:
    """Client for the Pizzeria backend API.

    Implements the OrderSubmissionService contract through ``submit``.
    """

    def __init__(
        self,
        base_url: str = None,
        timeout: int = None,
        max_retries: int = None,
        session_id: str = None
    ):
        """Initialize API client.

        Args:
            base_url: Backend API URL (default from config)
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts for idempotent requests
            session_id: Session ID sent with every request
        """
        self.base_url = base_url or config.API_BASE_URL
        self.timeout = timeout or config.API_TIMEOUT_SECONDS
        self.max_retries = max_retries or config.MAX_RETRY_ATTEMPTS
        self._session_id = session_id

        # urllib3 only retries idempotent methods by default, so POST /orders
        # is never replayed
        self.session = requests.Session()
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def session_id(self) -> Optional[str]:
        """Get current session ID."""
        return self._session_id

    @session_id.setter
    def session_id(self, value: str):
        """Set session ID sent in the X-Session-ID header."""
        self._session_id = value

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers including session ID if set."""
        headers = {}
        if self._session_id:
            headers["X-Session-ID"] = self._session_id
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> requests.Response:
        """Make HTTP request with error handling."""
        url = f"{self.base_url}{endpoint}"
        kwargs.setdefault('timeout', self.timeout)

        headers = self._get_headers()
        if 'headers' in kwargs:
            headers.update(kwargs['headers'])
        kwargs['headers'] = headers

        try:
            response = self.session.request(method, url, **kwargs)
            return response
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {method} {url} - {e}")
            raise

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        """Extract a readable error from a non-success response."""
        try:
            detail = response.json().get('detail', f"HTTP {response.status_code}")
        except (json.JSONDecodeError, ValueError, AttributeError):
            return f"HTTP {response.status_code}: {response.text[:100] if response.text else 'Unknown error'}"
        if isinstance(detail, list):
            # FastAPI request validation errors
            return "; ".join(str(item.get('msg', item)) for item in detail if isinstance(item, dict)) or str(detail)
        return str(detail)

    # Health check
    def health_check(self) -> bool:
        """Check if backend is healthy."""
        try:
            response = self._request('GET', '/api/v1/health')
            return response.status_code == 200
        except requests.exceptions.RequestException:
            return False

    # Menu
    def get_toppings(self) -> ToppingCatalog:
        """Fetch the topping catalog served by the backend.

        Raises:
            BackendUnavailableError: If the backend cannot be reached
            APIError: If the backend answers with an error or invalid data
        """
        try:
            response = self._request('GET', '/api/v1/toppings')
        except requests.exceptions.RequestException as e:
            raise BackendUnavailableError(f"Cannot load toppings: {e}") from e

        if response.status_code != 200:
            raise APIError(self._error_detail(response), status_code=response.status_code)

        try:
            return ToppingCatalog.from_records(response.json())
        except (json.JSONDecodeError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Invalid topping catalog from backend: {e}")
            raise APIError("Invalid response from server", status_code=response.status_code) from e

    # Orders
    def submit(self, order: PizzaOrder) -> SubmissionResult:
        """Submit a pizza order.

        Args:
            order: Validated order

        Returns:
            SubmissionResult with the order id on success
        """
        try:
            response = self._request('POST', '/api/v1/orders', json=order.to_payload())
        except requests.exceptions.RequestException as e:
            return SubmissionResult.rejected(str(e))

        if response.status_code == 201:
            try:
                data = response.json()
            except (json.JSONDecodeError, ValueError) as e:
                logger.error(f"Invalid JSON in success response: {e}")
                return SubmissionResult.rejected("Invalid response from server")

            return SubmissionResult.accepted(
                order_id=data.get('id'),
                message=data.get('message'),
            )

        error = self._error_detail(response)
        logger.warning(f"Order rejected by backend: {error}")
        return SubmissionResult.rejected(error)

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Get a recently placed order, or None if the backend does not know it."""
        try:
            response = self._request('GET', f'/api/v1/orders/{order_id}')
        except requests.exceptions.RequestException as e:
            raise BackendUnavailableError(f"Cannot load order: {e}") from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise APIError(self._error_detail(response), status_code=response.status_code)
        return response.json()


# Singleton pattern with thread-safe initialization
_api_client: Optional[PizzaAPIClient] = None
_api_client_lock = threading.Lock()


def get_api_client() -> PizzaAPIClient:
    """Get singleton API client instance (thread-safe)."""
    global _api_client
    if _api_client is None:
        with _api_client_lock:
            if _api_client is None:
                _api_client = PizzaAPIClient()
    return _api_client


def set_session_id(session_id: str) -> None:
    """Set session ID on the singleton API client.

    Call this early in the app lifecycle with the user's session ID.

    Args:
        session_id: Unique session identifier
    """
    client = get_api_client()
    client.session_id = session_id
    logger.debug(f"API client session ID set: {session_id[:8]}...")
