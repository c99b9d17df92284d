"""
Upstream inference client.

Posts a built AssistantRequest to the OpenAI-compatible API and returns the
raw JSON document. Every failure surfaces as UpstreamError; nothing is
retried here.
"""

from typing import Any, Dict, Optional

import httpx

from tsea.assistant.request_builder import AssistantRequest
from tsea.config import Settings
from tsea.errors import ConfigurationError, UpstreamError
from tsea.logging_config import get_logger

logger = get_logger(__name__)


class AssistantClient:
    """Thin async HTTP wrapper around the remote inference API."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "AssistantClient":
        key = settings.openai_api_key if settings.ai_configured else ""
        return cls(
            api_key=key,
            base_url=settings.openai_base_url,
            timeout=settings.upstream_timeout_seconds,
            http_client=http_client,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, request: AssistantRequest) -> Dict[str, Any]:
        """
        POST the request and return the decoded JSON object.

        Raises:
            ConfigurationError: no API key configured
            UpstreamError: network failure, timeout, non-2xx status or a body
                that is not a JSON object
        """
        if not self.api_key:
            raise ConfigurationError("Assistant API key is not configured")

        url = f"{self.base_url}{request.path}"
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    url, json=request.body, headers=self._headers(), timeout=self.timeout,
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=request.body, headers=self._headers())
        except httpx.TimeoutException as exc:
            logger.warning(
                "Assistant upstream timed out",
                extra={"persona": request.persona.value, "path": request.path},
            )
            raise UpstreamError(f"Upstream call timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "Assistant upstream request failed: %s",
                exc,
                extra={"persona": request.persona.value, "path": request.path},
            )
            raise UpstreamError(f"Upstream call failed: {exc}") from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                "Assistant upstream returned %s",
                response.status_code,
                extra={"persona": request.persona.value, "path": request.path},
            )
            raise UpstreamError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError("Upstream returned malformed JSON", status_code=response.status_code) from exc
        if not isinstance(payload, dict):
            raise UpstreamError("Upstream returned an unexpected body", status_code=response.status_code)
        return payload


def _error_message(response: httpx.Response) -> str:
    """Best upstream error message available for a failed response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
    return f"Upstream returned HTTP {response.status_code}"
