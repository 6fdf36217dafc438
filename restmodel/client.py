"""
HTTP client used by models to talk to the REST API
"""

import logging
import requests
from typing import Dict, Any, Optional
from .config import settings
from .exceptions import (
    TransportError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    ConnectionError
)

logger = logging.getLogger(__name__)

class RestClient:
    """Low-level HTTP client returning decoded response bodies"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client

        Args:
            base_url: API base URL, prepended to relative model URLs
                      (default: settings.BASE_URL)
            api_key: Optional API key sent with every request
            timeout: Request timeout in seconds (default: settings.TIMEOUT)
            session: Pre-configured requests session to reuse
        """
        self.base_url = (base_url if base_url is not None else settings.BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else settings.TIMEOUT
        self.session = session or requests.Session()

        api_key = api_key or settings.API_KEY
        if api_key:
            self.session.headers.update({
                settings.API_KEY_HEADER: api_key
            })

    def build_url(self, url: str) -> str:
        """Join a model URL onto the base URL unless it is already absolute"""
        if url.startswith(("http://", "https://")):
            return url
        if not url.startswith('/'):
            url = '/' + url
        return f"{self.base_url}{url}"

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Make HTTP request to API

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            url: Model URL, relative to base_url or absolute
            params: Query parameters
            json: JSON body

        Returns:
            Response body as dictionary, empty when the API sends no content

        Raises:
            TransportError: On API or network error
        """
        full_url = self.build_url(url)
        logger.debug("%s %s", method, full_url)

        try:
            response = self.session.request(
                method=method,
                url=full_url,
                params=params,
                json=json,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise ConnectionError("Request timeout", status_code=408)
        except requests.exceptions.ConnectionError as e:
            raise ConnectionError(f"Connection failed: {str(e)}", status_code=503)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {str(e)}")

        # Handle errors
        if response.status_code >= 400:
            self._handle_error(response)

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError:
            raise TransportError(
                f"Invalid JSON in response from {method} {full_url}",
                status_code=response.status_code
            )

    def _handle_error(self, response: requests.Response):
        """Handle API error responses"""
        body = None
        try:
            body = response.json()
            message = body.get("detail", "Unknown error") if isinstance(body, dict) else str(body)
        except ValueError:
            message = response.text or f"HTTP {response.status_code}"

        logger.warning(
            "%s %s failed with HTTP %s: %s",
            response.request.method if response.request is not None else "?",
            response.url,
            response.status_code,
            message
        )

        if response.status_code == 401:
            raise AuthenticationError(message, status_code=401, response=body)
        elif response.status_code == 404:
            raise NotFoundError(message, status_code=404, response=body)
        elif response.status_code == 422:
            raise ValidationError(message, status_code=422, response=body)
        else:
            raise TransportError(message, status_code=response.status_code, response=body)

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make GET request"""
        return self._request("GET", url, params=params)

    def post(self, url: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make POST request"""
        return self._request("POST", url, json=json)

    def put(self, url: str, json: Optional[Dict] = None) -> Dict[str, Any]:
        """Make PUT request"""
        return self._request("PUT", url, json=json)

    def patch(self, url: str, json: Optional[Dict] = None) -> Dict[str, Any]:
        """Make PATCH request"""
        return self._request("PATCH", url, json=json)

    def delete(self, url: str, params: Optional[Dict] = None) -> Dict[str, Any]:
        """Make DELETE request"""
        return self._request("DELETE", url, params=params)
