"""OpenAI Responses API client with tolerant text extraction"""
import asyncio
import logging
from typing import Any, Dict, List, Optional
from openai import OpenAI
from promptify_api.core.config import GeneratorConfig
from promptify_api.models.errors import ApplicationError, ErrorCode, ModelCallError

logger = logging.getLogger(__name__)

# Envelope fields scanned, in order, when output_text is missing or blank
_OUTPUT_BUCKETS = ("output", "response", "data")


# Reads a field from either an SDK object or a plain dict.
def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _text_from_items(items: Any) -> Optional[str]:
    """First output_text entry in a list of output items (or content entries)"""
    if not isinstance(items, (list, tuple)):
        return None
    for item in items:
        content = _field(item, "content")
        entries = content if isinstance(content, (list, tuple)) else [item]
        for entry in entries:
            if _field(entry, "type") == "output_text":
                text = _field(entry, "text")
                if isinstance(text, str) and text:
                    return text
    return None


def extract_output_text(envelope: Any) -> Optional[str]:
    """
    Pull the generated text out of an untyped Responses API envelope.

    Fallback order:
      1. non-blank `output_text`
      2. first `output_text` content entry in `output`, `response` or `data`
      3. blank `output_text` (the model answered with nothing)

    Returns:
        The text, or None if no text-bearing path exists (malformed envelope)
    """
    output_text = _field(envelope, "output_text")
    if isinstance(output_text, str) and output_text.strip():
        return output_text

    for bucket in _OUTPUT_BUCKETS:
        text = _text_from_items(_field(envelope, bucket))
        if text:
            return text

    if isinstance(output_text, str):
        return output_text
    return None


class ModelClient:
    """Calls the generative model; the only suspending operation in the pipeline"""

    def __init__(self, config: GeneratorConfig, api_key: str = "", client: Optional[OpenAI] = None):
        self.config = config
        self._api_key = api_key
        self._client = client

    # Creates the OpenAI client on first use so the app can start without a key.
    # A missing key surfaces as a configuration error on the first request instead.
    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self._api_key:
                raise ApplicationError(
                    code=ErrorCode.CONFIGURATION_ERROR,
                    message="OPENAI_API_KEY is not configured",
                    hint="Set OPENAI_API_KEY in the environment or .env file.",
                )
            self._client = OpenAI(api_key=self._api_key)
        return self._client

    async def complete(self, messages: List[Dict[str, str]], max_output_tokens: Optional[int] = None) -> str:
        """
        Send one request and return the raw text.

        Args:
            messages: Responses API input messages (role/content)
            max_output_tokens: Output budget override; defaults to the configured cap

        Raises:
            ModelCallError: transport failure, timeout, or malformed envelope
        """
        kwargs: Dict[str, Any] = {
            "model": self.config.model,
            "input": messages,
            "max_output_tokens": max_output_tokens or self.config.max_output_tokens,
        }
        if self.config.temperature is not None:
            kwargs["temperature"] = self.config.temperature

        client = self.client
        logger.info(
            f"[ModelClient] Calling {self.config.model} | "
            f"max_output_tokens={kwargs['max_output_tokens']} | "
            f"messages={len(messages)} | "
            f"timeout={self.config.request_timeout}s"
        )
        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(client.responses.create, **kwargs),
                timeout=self.config.request_timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"[ModelClient] ✗ Timeout after {self.config.request_timeout}s")
            raise ModelCallError(f"Model call timed out after {self.config.request_timeout}s")
        except Exception as e:
            logger.error(f"[ModelClient] ✗ Model call failed | error_type={type(e).__name__} | {e}", exc_info=True)
            raise ModelCallError(f"Model call failed: {e}") from e

        text = extract_output_text(response)
        if text is None:
            logger.error(f"[ModelClient] ✗ No text in response envelope: {repr(response)[:300]}")
            raise ModelCallError("Model response envelope contained no text output")

        usage = _field(response, "usage")
        logger.info(
            f"[ModelClient] ✓ Response received | "
            f"length={len(text)} chars | "
            f"input_tokens={_field(usage, 'input_tokens')} | "
            f"output_tokens={_field(usage, 'output_tokens')}"
        )
        return text
