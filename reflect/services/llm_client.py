"""
Chat-completion client for the remote language model.
One POST per call, no retries; failures surface as LLMError subclasses.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from reflect.core.config import settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base class for remote language-model failures."""


class LLMUnavailableError(LLMError):
    """No credential, transport failure, timeout or non-2xx status."""


class LLMResponseError(LLMError):
    """The endpoint answered 2xx without a usable message body."""


class ChatCompletionClient:
    """Thin async wrapper around an OpenAI-style chat-completions endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str,
        model: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.api_url = api_url
        self.model = model
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int,
        timeout: float,
    ) -> str:
        """Send ``messages`` and return ``choices[0].message.content``."""
        if not self.is_configured:
            raise LLMUnavailableError("No API key configured")

        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise LLMUnavailableError(f"Request timed out after {timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise LLMUnavailableError(f"HTTP {e.response.status_code} from model endpoint") from e
        except httpx.HTTPError as e:
            raise LLMUnavailableError(f"Transport error: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise LLMResponseError("Response body is not JSON") from e
        return _extract_content(data)


def _extract_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise LLMResponseError("Response has no choices[0].message.content") from e
    if not isinstance(content, str) or not content.strip():
        raise LLMResponseError("Response message content is empty")
    return content


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_chat_client: Optional[ChatCompletionClient] = None


def get_chat_client() -> ChatCompletionClient:
    """Get or create the client configured from settings."""
    global _chat_client
    if _chat_client is None:
        _chat_client = ChatCompletionClient(
            api_key=settings.LLM_API_KEY,
            api_url=settings.LLM_API_URL,
            model=settings.LLM_MODEL,
        )
        logger.info("Chat client ready (model=%s, configured=%s)", settings.LLM_MODEL, _chat_client.is_configured)
    return _chat_client
