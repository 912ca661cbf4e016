"""
OpenAI-compatible transport using the official SDK.

The default base URL is the Gemini OpenAI-compatible endpoint, so first-party
models are reached with the same client other compatible vendors use.
"""

from typing import Any

from openai import AsyncOpenAI
from pydantic import BaseModel

from lifelog.core.transport.base import ContentPart, ProviderTransport, TextPart
from lifelog.utils.exceptions import TransportError
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}


class OpenAITransport(ProviderTransport):
    """
    OpenAI-compatible transport for native handles.

    Uses chat completions with a strict ``json_schema`` response format when a
    schema is requested.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout: float = 120.0,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ):
        """
        Initialize OpenAI-compatible transport.

        Args:
            api_key: Resolved API key
            model: Model id sent with every request
            base_url: Optional compatible endpoint (default: Gemini OpenAI-compatible API)
            timeout: Request timeout in seconds
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.client = AsyncOpenAI(
            api_key=api_key, base_url=base_url or DEFAULT_BASE_URL, timeout=timeout
        )

    def _content_item(self, part: ContentPart) -> dict[str, Any]:
        if isinstance(part, TextPart):
            return {"type": "text", "text": part.text}

        if part.kind == "image":
            return {"type": "image_url", "image_url": {"url": part.to_data_url()}}
        if part.kind == "audio":
            return {
                "type": "input_audio",
                "input_audio": {
                    "data": part.to_base64(),
                    "format": AUDIO_FORMATS.get(part.mime_type, "wav"),
                },
            }
        return {"type": "file", "file": {"file_data": part.to_data_url()}}

    def _build_messages(
        self, parts: list[ContentPart], system_instruction: str | None
    ) -> list[dict[str, Any]]:
        messages: list[dict[str, Any]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})

        if all(isinstance(part, TextPart) for part in parts):
            content: Any = "\n".join(part.text for part in parts)
        else:
            content = [self._content_item(part) for part in parts]

        messages.append({"role": "user", "content": content})
        return messages

    @classmethod
    def _strict(cls, node: Any) -> Any:
        """Require every property and forbid extras on all objects of a JSON schema."""
        if isinstance(node, dict):
            node = {key: cls._strict(value) for key, value in node.items()}
            if node.get("type") == "object" and "properties" in node:
                node["additionalProperties"] = False
                node["required"] = list(node["properties"])
                for prop in node["properties"].values():
                    prop.pop("default", None)
            return node
        if isinstance(node, list):
            return [cls._strict(value) for value in node]
        return node

    @classmethod
    def _response_format(cls, schema: type[BaseModel]) -> dict[str, Any]:
        json_schema = cls._strict(schema.model_json_schema())
        return {
            "type": "json_schema",
            "json_schema": {"name": schema.__name__, "schema": json_schema, "strict": True},
        }

    async def generate(
        self,
        parts: list[ContentPart],
        response_schema: type[BaseModel] | None = None,
        system_instruction: str | None = None,
        **kwargs,
    ) -> str:
        """
        Generate an answer via chat completions.

        Args:
            parts: Ordered content parts
            response_schema: Optional Pydantic model for strict JSON output
            system_instruction: Optional system message
            **kwargs: Additional parameters (e.g., stop, presence_penalty)
        Returns:
            Raw message content ("" if none)
        Raises:
            TransportError: If the API call fails
        """
        params: dict[str, Any] = {
            "model": self.model,
            "messages": self._build_messages(parts, system_instruction),
            "temperature": kwargs.pop("temperature", self.temperature),
            "max_tokens": kwargs.pop("max_tokens", self.max_tokens),
            **kwargs,
        }
        if response_schema is not None:
            params["response_format"] = self._response_format(response_schema)

        try:
            response = await self.client.chat.completions.create(**params)
        except Exception as e:
            logger.bind(model=self.model, error_type=type(e).__name__).error(
                f"OpenAI-compatible API error: {e}"
            )
            raise TransportError(
                f"Provider call failed: {e}",
                context={"model": self.model, "error_type": type(e).__name__},
            ) from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self):
        """Close OpenAI client."""
        await self.client.close()
