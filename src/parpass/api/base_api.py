"""
Base API client for the ParPass client.
"""

import json
import time
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from parpass import __version__
from parpass.exceptions import APIError
from parpass.exceptions import APINotFoundError
from parpass.exceptions import APIResponseError
from parpass.exceptions import APITimeoutError
from parpass.exceptions import APIValidationError
from parpass.utils.logging_utils import LoggerMixin


JSONPayload = dict[str, Any] | list[dict[str, Any]] | None

class BaseAPI(LoggerMixin):
    """Base class for API clients."""

    # Default timeouts (connection timeout, read timeout)
    DEFAULT_TIMEOUT = (5, 20)

    # Failed calls are surfaced to the caller, never replayed
    DEFAULT_RETRY_TOTAL = 0

    def __init__(
        self,
        base_url: str,
        timeout: tuple[float, float] | None = None,
        session: requests.Session | None = None
    ):
        """Initialize API client.

        Args:
            base_url: Base URL for API
            timeout: Optional (connect, read) timeout
            session: Optional preconfigured session
        """
        super().__init__()  # Initialize LoggerMixin

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.session = session or self._create_session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': f'parpass/{__version__}'
        })
        self.set_log_context(api=self.__class__.__name__)
        self.debug(f"BaseAPI: base_url={self.base_url} timeout={self.timeout}")

    def _create_session(self) -> requests.Session:
        """
        Create a requests session with the retry policy mounted.

        Returns:
            Session with configured retry strategy
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=self.DEFAULT_RETRY_TOTAL,
            connect=self.DEFAULT_RETRY_TOTAL,
            read=self.DEFAULT_RETRY_TOTAL,
            status=self.DEFAULT_RETRY_TOTAL,
            raise_on_status=False
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _validate_response(self, response: requests.Response) -> None:
        """
        Validate response and raise appropriate errors.

        Args:
            response: Response to validate

        Raises:
            APINotFoundError: If the resource does not exist
            APIResponseError: If response status code indicates an error
        """
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_msg = f"HTTP {response.status_code}"
            try:
                error_data = response.json()
                if isinstance(error_data, dict):
                    detail = error_data.get('error', error_data.get('message'))
                    if detail:
                        error_msg = f"{error_msg}: {detail}"
            except (ValueError, AttributeError, TypeError):
                if isinstance(response.text, str) and response.text.strip():
                    error_msg = f"{error_msg}: {response.text.strip()[:100]}"

            if response.status_code == 404:
                raise APINotFoundError(f"Not found: {error_msg}", response=response) from e
            raise APIResponseError(
                f"Request failed: {error_msg}",
                response=response,
                status_code=response.status_code
            ) from e

    def _parse_response(self, response: requests.Response) -> JSONPayload:
        """Parse response content.

        Args:
            response: Response object to parse

        Returns:
            Parsed response data or None if empty

        Raises:
            APIValidationError: If response cannot be parsed
        """
        try:
            result: dict[str, Any] | list[dict[str, Any]] = response.json()
            return result
        except ValueError:
            content = response.text.strip()

            if not content or content == "null":
                return None

            # Handle text that looks like a JSON document
            if content[0] in "[{":
                try:
                    parsed: dict[str, Any] | list[dict[str, Any]] = json.loads(content)
                    return parsed
                except json.JSONDecodeError:
                    pass

            raise APIValidationError(f"Failed to parse response: {content[:100]}...")

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str] | None = None,
        data: dict[str, Any] | None = None,
        timeout: tuple[float, float] | None = None,
        validate_response: bool = True
    ) -> JSONPayload:
        """
        Make an API request.

        Args:
            method: HTTP method
            endpoint: API endpoint, relative to the base URL
            params: Query parameters
            data: Request body data, sent as JSON
            timeout: Request timeout (connection timeout, read timeout)
            validate_response: Whether to validate the response

        Returns:
            Response data

        Raises:
            APITimeoutError: If request times out
            APINotFoundError: If the resource does not exist
            APIResponseError: If request fails
            APIValidationError: If response validation fails
            APIError: For other errors
        """
        url = self._build_url(endpoint)
        started = time.monotonic()

        def took() -> str:
            return f"{time.monotonic() - started:.2f}s"

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=data,
                timeout=timeout or self.timeout
            )
            if validate_response:
                self._validate_response(response)
            return self._parse_response(response)

        except requests.exceptions.Timeout as e:
            self.error(f"{method} timed out after {took()}", url=url)
            raise APITimeoutError(f"Request timed out after {took()}: {e}", details={'url': url}) from e

        except requests.exceptions.RequestException as e:
            self.error(f"{method} failed after {took()}: {e}", url=url)
            raise APIResponseError(f"Request failed after {took()}: {e}") from e

        except APIError as e:
            self.debug(f"{method} returned an error after {took()}: {e}", url=url)
            raise

        except Exception as e:
            self.error(f"Unexpected error during {method} after {took()}: {e}", url=url)
            raise APIError(f"Unexpected error: {e}") from e

    def _get(self, endpoint: str, params: dict[str, str] | None = None) -> JSONPayload:
        return self._make_request("GET", endpoint, params=params)

    def _get_object(self, endpoint: str) -> dict[str, Any]:
        result = self._get(endpoint)
        if not isinstance(result, dict):
            raise APIValidationError(f"Expected an object from {endpoint}", details={'type': type(result).__name__})
        return result

    def _get_list(self, endpoint: str, params: dict[str, str] | None = None) -> list[dict[str, Any]]:
        result = self._get(endpoint, params=params)
        if result is None:
            return []
        if not isinstance(result, list):
            raise APIValidationError(f"Expected a list from {endpoint}", details={'type': type(result).__name__})
        return result
