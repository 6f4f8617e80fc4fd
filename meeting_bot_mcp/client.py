"""HTTP gateway to the meeting-bot API."""

import logging
from typing import Any, Dict, Optional

import httpx

from meeting_bot_mcp.config import Settings
from meeting_bot_mcp.errors import ApiError, NetworkError

logger = logging.getLogger(__name__)


class MeetingBotClient:
    """Issues single requests against the bot API.

    One ``httpx.AsyncClient`` is opened per request, so instances hold no
    connection state and can be shared by concurrent tool calls.

    Args:
        settings: Base URL, API key and timeout.
        transport: Optional httpx transport, used by tests to stub the API.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def _get_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._settings.api_key:
            headers["Authorization"] = f"Token {self._settings.api_key}"
        return headers

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            ApiError: the API answered with a non-2xx status.
            NetworkError: no HTTP response was received.
        """
        url = f"{self._settings.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._get_headers(),
                    json=body,
                )
        except httpx.TransportError as e:
            detail = str(e) or type(e).__name__
            logger.warning("%s %s failed: %s", method, url, detail)
            raise NetworkError(detail) from e

        if not response.is_success:
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise ApiError(response.status_code, response.text)

        if not response.content:
            return None
        return response.json()
