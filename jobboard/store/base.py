"""Base record store class with shared HTTP functionality.

This module provides the abstract base class every record store client
implements, along with the shared request helper that maps transport and HTTP
failures onto the StoreError hierarchy.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import requests

from jobboard.domain.models import RawRecord
from jobboard.logging import get_logger

from .exceptions import (
    StoreConfigurationError,
    StoreHTTPError,
    StoreResponseError,
    StoreTimeoutError,
)

logger = get_logger(__name__, component="store")

# (field name, "asc" | "desc")
SortSpec = Sequence[Tuple[str, str]]
QueryParams = Union[Dict[str, Any], List[Tuple[str, Any]]]


class BaseRecordStore(ABC):
    """Base class for external record stores.

    Provides shared HTTP request handling and error mapping. Subclasses
    implement listing and single-record lookup.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    def __init__(self, timeout: int = 30, user_agent: str = "JobBoard/1.0") -> None:
        """Initialize store with HTTP settings.

        Args:
            timeout: HTTP request timeout in seconds (default 30, range 5-300)
            user_agent: User-Agent header for requests

        Raises:
            StoreConfigurationError: If timeout is outside valid range or user_agent is empty
        """
        if not 5 <= timeout <= 300:
            raise StoreConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise StoreConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @abstractmethod
    def list_records(
        self,
        filter_formula: Optional[str] = None,
        sort: Optional[SortSpec] = None,
        max_records: Optional[int] = None,
    ) -> List[RawRecord]:
        """List records, following pagination until exhausted.

        Args:
            filter_formula: Store-side filter expression, e.g. ``{status} = 'active'``
            sort: Sort order as (field, direction) pairs
            max_records: Stop after this many records (None = store default, 0 = unlimited)

        Returns:
            Records in the order returned by the store

        Raises:
            StoreError: On configuration, transport or response errors
        """

    @abstractmethod
    def find_record(self, record_id: str) -> Optional[RawRecord]:
        """Fetch one record by ID.

        Returns:
            The record, or None if the store has no record with that ID

        Raises:
            StoreError: On configuration, transport or response errors
        """

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[QueryParams] = None,
        not_found_ok: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """Make HTTP request with error handling.

        Args:
            url: URL to request
            method: HTTP method (default "GET")
            headers: Additional headers to include (merged with defaults)
            params: Query parameters, as a dict or a list of pairs
            not_found_ok: Return None instead of raising on HTTP 404

        Returns:
            Parsed JSON response, or None for a tolerated 404

        Raises:
            StoreHTTPError: On 4xx or 5xx HTTP status, or transport failure
            StoreTimeoutError: On request timeout
            StoreResponseError: On invalid JSON
        """
        request_headers = self._session.headers.copy()
        if headers:
            request_headers.update(headers)

        try:
            logger.debug(
                f"HTTP {method} request to {url}",
                extra={
                    "event": "store.request.started",
                    "method": method,
                    "url": url,
                    "timeout": self.timeout,
                },
            )

            response = self._session.request(
                method=method,
                url=url,
                headers=request_headers,
                params=params,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={
                    "event": "store.request.timeout",
                    "error_type": "Timeout",
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            raise StoreTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds",
                url=url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "store.request.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise StoreHTTPError(
                f"Request to {url} failed: {e}",
                status_code=0,
                url=url,
            ) from e

        if response.status_code == 404 and not_found_ok:
            logger.debug(
                "Record not found",
                extra={"event": "store.request.not_found", "url": url},
            )
            return None

        if response.status_code >= 400:
            is_server_error = response.status_code >= 500
            logger.log(
                logging.WARNING if is_server_error else logging.ERROR,
                f"HTTP {response.status_code} error from {url}",
                extra={
                    "event": "store.request.http_error",
                    "status_code": response.status_code,
                    "url": url,
                },
            )
            raise StoreHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={
                    "event": "store.request.invalid_json",
                    "error_type": "JSONDecodeError",
                    "url": url,
                },
            )
            raise StoreResponseError(
                f"Failed to parse JSON response from {url}: {e}"
            ) from e

        if not isinstance(data, dict):
            raise StoreResponseError(
                f"Expected a JSON object from {url}, got {type(data).__name__}"
            )

        logger.debug(
            "HTTP request succeeded",
            extra={
                "event": "store.request.succeeded",
                "status_code": response.status_code,
                "url": url,
            },
        )
        return data
