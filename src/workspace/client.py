"""Async HTTP client for the SiYuan kernel API.

Every SiYuan endpoint is a POST with a JSON body that answers with the
envelope ``{"code": 0, "msg": "", "data": ...}``. A non-zero ``code`` is a
rejected call.

Usage:
    async with SiyuanClient("http://127.0.0.1:6806", token="...") as client:
        notebooks = await client.request("/api/notebook/lsNotebooks")
"""

import logging
from typing import Any, Dict, Optional

import httpx

from core.exceptions import WorkspaceAPIError, WorkspaceConnectionError

logger = logging.getLogger(__name__)


class SiyuanClient:
    """Thin async wrapper around ``httpx.AsyncClient`` for SiYuan endpoints.

    Attributes:
        base_url: Base URL of the SiYuan kernel
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the SiYuan kernel
            token: API token, sent as ``Authorization: Token <token>``
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Token {token}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SiyuanClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def request(self, endpoint: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        POST to a SiYuan endpoint and unwrap the ``data`` field.

        Args:
            endpoint: API path such as ``/api/block/getBlockKramdown``
            payload: JSON body (``{}`` when omitted)

        Returns:
            The ``data`` member of the response envelope

        Raises:
            WorkspaceConnectionError: Kernel unreachable or timed out
            WorkspaceAPIError: HTTP error status, malformed body or non-zero code
        """
        logger.debug(f"SiYuan request: {endpoint}")
        try:
            response = await self._client.post(endpoint, json=payload or {})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise WorkspaceAPIError(
                f"SiYuan API {endpoint} returned HTTP {status}",
                code=status,
                endpoint=endpoint,
            ) from e
        except httpx.RequestError as e:
            raise WorkspaceConnectionError(
                f"Cannot reach SiYuan at {self.base_url}: {e}",
                {"endpoint": endpoint},
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise WorkspaceAPIError(
                f"SiYuan API {endpoint} returned a non-JSON response",
                endpoint=endpoint,
            ) from e

        if not isinstance(body, dict) or "code" not in body:
            raise WorkspaceAPIError(
                f"SiYuan API {endpoint} returned an unexpected payload",
                endpoint=endpoint,
            )

        code = body.get("code")
        if code != 0:
            msg = body.get("msg") or "unknown error"
            raise WorkspaceAPIError(
                f"SiYuan API {endpoint} failed: {msg}",
                code=code,
                endpoint=endpoint,
            )

        return body.get("data")


def first_operation_id(data: Any, endpoint: str = None) -> str:
    """Pull the new block ID out of a block transaction response.

    ``appendBlock``/``insertBlock`` answer with
    ``[{"doOperations": [{"id": "...", "action": "insert"}]}]``.
    """
    try:
        return data[0]["doOperations"][0]["id"]
    except (IndexError, KeyError, TypeError):
        raise WorkspaceAPIError(
            "SiYuan did not report the ID of the new block",
            endpoint=endpoint,
        )
