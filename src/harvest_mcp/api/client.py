"""
Harvest API client.

Handles:
- Authenticated requests (bearer token + Harvest-Account-Id header)
- Mapping HTTP error statuses and transport failures to HarvestAPIError

One client is opened per tool invocation. No retries: failures surface
immediately and the agent host decides what to do.
"""

import logging
from typing import Any, Optional

import httpx

from harvest_mcp.errors import HarvestAPIError
from harvest_mcp.settings import Credentials, HARVEST_API_URL


logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull a readable message out of Harvest's error payload."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("message", "error_description", "error"):
            if payload.get(key):
                return str(payload[key])

    return f"Harvest API request failed with status {response.status_code}"


class HarvestClient:
    """
    Thin wrapper over httpx.Client for the Harvest v2 API.

    Usage:
        with HarvestClient(credentials) as client:
            me = client.get("/users/me")
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = HARVEST_API_URL,
        user_agent: str = "harvest-mcp",
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._http = httpx.Client(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {credentials.token}",
                "Harvest-Account-Id": str(credentials.account_id),
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "HarvestClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"Harvest {method} {path} failed: {e}")
            raise HarvestAPIError(f"Could not reach Harvest API: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"Harvest {method} {path} returned {response.status_code}: {message}")
            raise HarvestAPIError(message, status_code=response.status_code)

        logger.debug(f"Harvest {method} {path} -> {response.status_code}")
        return response

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        """GET path and return parsed JSON."""
        return self._request("GET", path, params=params).json()

    def post(self, path: str, body: dict) -> Any:
        """POST JSON body and return parsed JSON."""
        return self._request("POST", path, json=body).json()

    def patch(self, path: str) -> Any:
        """PATCH path (no body) and return parsed JSON."""
        return self._request("PATCH", path).json()

    def delete(self, path: str) -> None:
        """DELETE path."""
        self._request("DELETE", path)
