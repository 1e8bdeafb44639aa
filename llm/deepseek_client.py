"""DeepSeek chat-completion client over plain HTTPS."""

import logging
from typing import Optional, List

import requests

from errors import ConfigError, MalformedResponseError, ServiceError, TransportError
from .base_client import BaseLLMClient, Message, LLMResponse

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.deepseek.com/chat/completions"


class DeepSeekClient(BaseLLMClient):
    """
    DeepSeek client implementation.

    Issues one blocking POST per call. Failures are mapped onto
    TransportError (timeout, connection) and ServiceError (non-2xx status,
    unusable body). Nothing is retried.
    """

    DEFAULT_MODEL = "deepseek-chat"
    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        api_key: Optional[str],
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT
    ):
        """
        Initialize DeepSeek client.

        Args:
            api_key: DeepSeek API key (required)
            api_url: Chat-completions endpoint (default: DeepSeek public API)
            model: Model to use (default: deepseek-chat)
            timeout: Request timeout in seconds (default: 30)

        Raises:
            ConfigError: If no API key is given
        """
        if not api_key:
            raise ConfigError("DEEPSEEK_API_KEY not found in environment variables")

        self.api_key = api_key
        self.api_url = api_url or DEFAULT_API_URL
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout
        logger.info(f"DeepSeek client initialized with model: {self.model}")

    def _get_headers(self) -> dict:
        """Build request headers."""
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(
        self,
        messages: List[Message],
        temperature: float,
        max_tokens: int
    ) -> dict:
        """Build the JSON request body."""
        return {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
            "stream": False,
        }

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 1000
    ) -> LLMResponse:
        """Send chat completion request to DeepSeek."""
        payload = self.build_payload(messages, temperature, max_tokens)
        logger.debug(
            f"POST {self.api_url} ({len(messages)} messages, "
            f"{sum(len(m.content) for m in messages)} chars, max_tokens={max_tokens})"
        )

        try:
            response = requests.post(
                self.api_url,
                json=payload,
                headers=self._get_headers(),
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"DeepSeek request timed out after {self.timeout}s")
            raise TransportError(
                f"Connection Error: request timed out after {self.timeout}s", timed_out=True
            ) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"DeepSeek connection failed: {e}")
            raise TransportError(f"Connection Error: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"DeepSeek request failed: {e}")
            raise TransportError(f"Connection Error: {e}") from e

        if not 200 <= response.status_code < 300:
            message = _error_message(response)
            logger.error(f"DeepSeek API error {response.status_code}: {message}")
            raise ServiceError(
                f"DeepSeek API Error: {response.status_code} - {message}",
                status_code=response.status_code
            )

        return self._parse_response(response)

    def _parse_response(self, response: requests.Response) -> LLMResponse:
        """Extract the first choice's message content."""
        try:
            data = response.json()
            choice = data["choices"][0]
            content = choice["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected DeepSeek response format: {e}")
            raise MalformedResponseError(
                "DeepSeek API Error: unexpected response format",
                status_code=response.status_code
            ) from e

        if not isinstance(content, str):
            raise MalformedResponseError(
                "DeepSeek API Error: completion content is not text",
                status_code=response.status_code
            )

        usage = data.get("usage")
        if isinstance(usage, dict):
            usage = {k: v for k, v in usage.items() if isinstance(v, int)}
        else:
            usage = None

        return LLMResponse(
            content=content,
            usage=usage,
            finish_reason=choice.get("finish_reason")
        )

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "deepseek"

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model


def _error_message(response: requests.Response) -> str:
    """Service-provided error message, if the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message") or "Unknown error"
    return "Unknown error"
