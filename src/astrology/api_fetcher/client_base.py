from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


logger = logging.getLogger(__name__)


class APIClientError(RuntimeError):
    """Base error for API client failures."""


class APIClientTimeout(APIClientError):
    """Raised when request times out."""


class APIClientHTTPError(APIClientError):
    """Raised for non-success HTTP responses."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class BaseAPIClient:
    """
    Reusable base HTTP client for the Prokerala API.

    Features:
    - Persistent session
    - Default headers
    - Optional transport retries (off by default, failover handles recovery)
    - Configurable timeout
    - Safe JSON parsing
    """

    DEFAULT_TIMEOUT = 15  # seconds
    DEFAULT_RETRIES = 0
    DEFAULT_BACKOFF_FACTOR = 0.5

    def __init__(
        self,
        base_url: str,
        default_headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
    ) -> None:

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT

        self.session = requests.Session()

        headers = {
            "User-Agent": "Astrology/1.0",
            "Accept": "application/json",
        }

        if default_headers:
            headers.update(default_headers)

        self.session.headers.update(headers)

        # Retry strategy (5xx only; 403/429 must reach the caller untouched)
        retry_strategy = Retry(
            total=retries if retries is not None else self.DEFAULT_RETRIES,
            backoff_factor=backoff_factor if backoff_factor is not None else self.DEFAULT_BACKOFF_FACTOR,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET", "POST"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    # ---------------------------------------------------
    # Core request methods
    # ---------------------------------------------------
    def get_json(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Send GET request and return parsed JSON.
        Raises clean, structured errors.
        """
        url = self._url(endpoint)

        try:
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise APIClientTimeout(
                f"Request timed out calling {url}"
            ) from e
        except requests.RequestException as e:
            raise APIClientError(
                f"Request failed calling {url}: {e}"
            ) from e

        return self._parse(response, url)

    def post_form(
        self,
        endpoint: str,
        data: Dict[str, str],
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Send a form-encoded POST request and return parsed JSON.
        """
        url = self._url(endpoint)

        try:
            response = self.session.post(
                url,
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise APIClientTimeout(
                f"Request timed out calling {url}"
            ) from e
        except requests.RequestException as e:
            raise APIClientError(
                f"Request failed calling {url}: {e}"
            ) from e

        return self._parse(response, url)

    @staticmethod
    def _parse(response: Any, url: str) -> Any:
        if response.status_code != 200:
            raise APIClientHTTPError(
                f"HTTP {response.status_code} returned from {url}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise APIClientError(
                f"Invalid JSON returned from {url}"
            ) from e

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "BaseAPIClient":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        self.close()
