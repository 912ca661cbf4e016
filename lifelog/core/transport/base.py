"""
Abstract base class for provider transports.
Handles one structured-generation call with multi-part content.
"""

import base64
from abc import ABC, abstractmethod

from pydantic import BaseModel


class TextPart(BaseModel):
    """Plain text content part."""

    text: str


class MediaPart(BaseModel):
    """Binary content part with its declared mime type."""

    data: bytes
    mime_type: str

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"

    @property
    def kind(self) -> str:
        """Top-level mime category: image, audio, video, ..."""
        return self.mime_type.split("/", 1)[0].lower()


ContentPart = TextPart | MediaPart


class ProviderTransport(ABC):
    """
    Abstract base for model provider transports.

    Responsibilities:
    - One generation call per request: ordered parts, optional schema,
      optional system instruction
    - Return the raw text of the answer
    - Wrap every SDK failure in TransportError
    """

    model: str

    @abstractmethod
    async def generate(
        self,
        parts: list[ContentPart],
        response_schema: type[BaseModel] | None = None,
        system_instruction: str | None = None,
        **kwargs,
    ) -> str:
        """
        Run one generation call.

        Args:
            parts: Ordered content parts (text and/or media)
            response_schema: Optional Pydantic model the output must follow (strict JSON)
            system_instruction: Optional system prompt
            **kwargs: Provider-specific parameters

        Returns:
            Raw text of the answer ("" when the provider returned nothing)

        Raises:
            TransportError: Network, auth, quota or other provider failures
        """
        pass

    @abstractmethod
    async def close(self):
        """
        Close any open connections.
        """
