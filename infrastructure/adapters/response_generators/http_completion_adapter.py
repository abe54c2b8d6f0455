# infrastructure/adapters/response_generators/http_completion_adapter.py
import logging
from typing import Any, Dict, Optional

import httpx

from core.domain.errors import BadResponseError, UnauthorizedError, UnreachableError
from core.ports.response_generator_port import ResponseGeneratorPort

logger = logging.getLogger(__name__)


class HttpCompletionAdapter(ResponseGeneratorPort):
    """
    Posts a chat-completion payload to an OpenAI-compatible endpoint.

    A single attempt per call; retrying is left to the caller.
    """

    def __init__(self, timeout: float = 120.0, client: Optional[httpx.Client] = None):
        self.timeout = timeout
        self.client = client

    def complete(self, endpoint: str, payload: Dict[str, Any], api_key: Optional[str] = None) -> str:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"

        try:
            if self.client is not None:
                response = self.client.post(endpoint, json=payload, headers=headers, timeout=self.timeout)
            else:
                response = httpx.post(endpoint, json=payload, headers=headers, timeout=self.timeout)
        except httpx.TransportError as e:
            logger.error("Error sending message to %s: %s", endpoint, e)
            raise UnreachableError(f"Failed to get response: {str(e)}") from e

        if response.status_code in (401, 403):
            logger.error("Response status: %s", response.status_code)
            raise UnauthorizedError(
                f"Failed to get response: endpoint rejected credentials ({response.status_code})",
                status_code=response.status_code,
            )
        if response.is_error:
            logger.error("Response status: %s", response.status_code)
            logger.error("Response data: %s", response.text)
            raise BadResponseError(
                f"Failed to get response: request failed with status code {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise BadResponseError("Unexpected response format from the API: body is not JSON",
                                   status_code=response.status_code) from e

        return self._extract_content(data, response.status_code)

    @staticmethod
    def _extract_content(data: Any, status_code: int) -> str:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            raise BadResponseError("Unexpected response format from the API", status_code=status_code)

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise BadResponseError("Unexpected response format from the API", status_code=status_code)
        return content
