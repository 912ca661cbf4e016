"""
Ollama transport using the native ollama-python SDK.
"""

import ollama
from pydantic import BaseModel

from lifelog.core.transport.base import ContentPart, MediaPart, ProviderTransport, TextPart
from lifelog.utils.exceptions import TransportError
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_HOST = "http://localhost:11434"


class OllamaTransport(ProviderTransport):
    """
    Ollama transport for locally hosted models.

    Images are sent through the ``images`` field; structured output uses the
    JSON schema ``format`` option. Audio and video parts are not supported
    by the chat API and are skipped.
    """

    def __init__(
        self,
        model: str,
        host: str | None = None,
        timeout: float = 120.0,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ):
        """
        Initialize Ollama transport.

        Args:
            model: Model name (e.g., "llama3.2-vision")
            host: Ollama server URL (default: local server)
            timeout: Request timeout in seconds
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
        """
        self.host = host or DEFAULT_HOST
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.client = ollama.AsyncClient(host=self.host, timeout=timeout)

    def _build_messages(
        self, parts: list[ContentPart], system_instruction: str | None
    ) -> list[dict]:
        texts: list[str] = []
        images: list[str] = []
        for part in parts:
            if isinstance(part, TextPart):
                texts.append(part.text)
            elif isinstance(part, MediaPart) and part.kind == "image":
                images.append(part.to_base64())
            else:
                logger.warning(f"Ollama transport skips {part.mime_type} content")

        user_message: dict = {"role": "user", "content": "\n".join(texts)}
        if images:
            user_message["images"] = images

        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append(user_message)
        return messages

    async def generate(
        self,
        parts: list[ContentPart],
        response_schema: type[BaseModel] | None = None,
        system_instruction: str | None = None,
        **kwargs,
    ) -> str:
        """
        Generate an answer using Ollama chat.

        Args:
            parts: Ordered content parts
            response_schema: Optional Pydantic model for structured JSON output
            system_instruction: Optional system message
            **kwargs: Additional options (passed to Ollama)

        Returns:
            Raw message content ("" if none)

        Raises:
            TransportError: If the Ollama call fails
        """
        options = {
            "temperature": kwargs.pop("temperature", self.temperature),
            "num_predict": kwargs.pop("max_tokens", self.max_tokens),
            **kwargs.pop("options", {}),
        }
        format_type = response_schema.model_json_schema() if response_schema else None

        try:
            response = await self.client.chat(
                model=self.model,
                messages=self._build_messages(parts, system_instruction),
                format=format_type,
                options=options,
                **kwargs,
            )
        except Exception as e:
            logger.bind(model=self.model, error_type=type(e).__name__).error(f"Ollama error: {e}")
            raise TransportError(
                f"Provider call failed: {e}",
                context={"model": self.model, "error_type": type(e).__name__},
            ) from e

        return response["message"]["content"] or ""

    async def close(self):
        """Close client (Ollama SDK handles cleanup internally)."""
        pass
