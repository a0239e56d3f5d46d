"""
Hevy HTTP Client.

Handles HTTP transport, API-key authentication, pagination, and error handling.
All endpoint-specific logic lives in the sibling modules (templates, folders, routines).

API reference: https://api.hevyapp.com/docs/
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from hevy_bbb.sdk.types import API_URL, API_KEY_HEADER, PAGE_COUNT_KEY

logger = logging.getLogger(__name__)


class HevyError(Exception):
    """Base class for Hevy SDK errors."""


class RemoteAPIError(HevyError):
    """The Hevy API answered with a non-success status code."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error (status {status_code}): {body}")


class TransportError(HevyError):
    """The request never produced an HTTP response."""


class HevyDecodeError(HevyError):
    """A successful response carried a body we could not decode."""


class HevyClient:
    """
    Hevy public API HTTP transport.

    Handles the api-key header, JSON bodies, status checking, and page walking.
    Endpoint calls are in sibling modules (sdk.templates, sdk.folders, sdk.routines).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = API_URL,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("Hevy API key is required")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def make_request(
        self,
        method: str,
        endpoint: str,
        params: Dict = None,
        json_data: Dict = None,
        ok_statuses: Iterable[int] = (200,),
    ) -> requests.Response:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET/POST/PUT)
            endpoint: API endpoint path (e.g. "routines" or "routines/abc")
            params: Query parameters
            json_data: JSON body data
            ok_statuses: Status codes treated as success

        Returns:
            The raw response; callers decode the body themselves

        Raises:
            TransportError: If the connection fails
            RemoteAPIError: If the status code is not in ok_statuses
        """
        headers = {
            API_KEY_HEADER: self._api_key,
            "Accept": "application/json",
        }
        if json_data is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        logger.debug("%s %s params=%s", method.upper(), url, params)

        try:
            response = self._session.request(
                method.upper(), url, headers=headers, params=params, json=json_data,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method.upper()} {endpoint} failed: {e}") from e

        if response.status_code not in tuple(ok_statuses):
            raise RemoteAPIError(response.status_code, response.text)

        return response

    def get_all_pages(self, endpoint: str, key: str, page_size: int) -> List[Dict[str, Any]]:
        """
        Walk a paginated list endpoint and return every item.

        Requests page 1, 2, ... until the current page reaches the reported
        page_count.

        Raises:
            HevyDecodeError: If a page body is not the expected JSON object
        """
        items: List[Dict[str, Any]] = []
        page = 1

        while True:
            response = self.make_request(
                "GET", endpoint, params={"page": page, "pageSize": page_size},
            )
            try:
                data = response.json()
                page_count = int(data.get(PAGE_COUNT_KEY, 0))
                items.extend(data.get(key) or [])
            except (ValueError, TypeError, AttributeError) as e:
                raise HevyDecodeError(f"Failed to decode {endpoint} page {page}: {e}") from e

            if page >= page_count:
                break
            page += 1

        logger.debug("Fetched %d %s over %d page(s)", len(items), key, page)
        return items
