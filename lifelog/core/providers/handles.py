"""
Provider handles: resolved, credentialed access to one model.

Each variant implements the same three operations (analyze, converse,
build_graph). Adding a provider means adding a variant; callers never branch
on the model id.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lifelog.config import SimulationConfig
from lifelog.core import prompts
from lifelog.core.transport.base import ContentPart, MediaPart, ProviderTransport, TextPart
from lifelog.models.catalog import ModelDescriptor, ProviderClass
from lifelog.models.graph import GraphData, GraphEntry
from lifelog.models.locale import Locale
from lifelog.models.memory import AIAnalysis, AnalysisPayload, MediaType, Memory
from lifelog.utils.exceptions import MalformedProviderOutputError
from lifelog.utils.id_generator import mask_secret
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

DEFAULT_MIME_TYPES = {
    MediaType.IMAGE: "image/jpeg",
    MediaType.AUDIO: "audio/webm",
    MediaType.VIDEO: "video/mp4",
}


def parse_structured(raw: str, schema: type[SchemaT]) -> SchemaT:
    """
    Parse provider text into a schema instance.

    Raises:
        MalformedProviderOutputError: Empty text, invalid JSON or schema mismatch
    """
    if not raw or not raw.strip():
        raise MalformedProviderOutputError("Provider returned no text")
    try:
        return schema.model_validate_json(prompts.extract_json(raw))
    except PydanticValidationError as e:
        raise MalformedProviderOutputError(
            f"Output does not match {schema.__name__}",
            context={"raw": raw[:500], "errors": e.error_count()},
        ) from e


class ProviderHandle(ABC):
    """Credentialed capability to analyze, converse and build graphs with a model."""

    provider_class: ProviderClass

    def __init__(self, descriptor: ModelDescriptor):
        self.descriptor = descriptor

    @property
    def model_id(self) -> str:
        return self.descriptor.id

    @abstractmethod
    async def analyze(self, memory: Memory, locale: Locale) -> AIAnalysis:
        """Produce a structured judgment of one memory."""

    @abstractmethod
    async def converse(self, query: str, context: str) -> str:
        """Answer a query from a memory context block; may embed citations."""

    @abstractmethod
    async def build_graph(self, entries: list[GraphEntry]) -> GraphData:
        """Ask for nodes and links relating the given memories (unfiltered)."""

    async def close(self) -> None:
        """Release any transport held by the handle."""

    async def __aenter__(self) -> "ProviderHandle":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model_id={self.model_id!r})"


class GenericProviderHandle(ProviderHandle):
    """
    Handle for models without a real backend integration.

    Returns deterministic placeholders shaped exactly like real results so the
    rest of the system works without live credentials. Never touches the
    network.
    """

    provider_class = ProviderClass.GENERIC

    def __init__(
        self,
        descriptor: ModelDescriptor,
        api_key: str,
        base_url: str | None = None,
        simulation: SimulationConfig | None = None,
    ):
        super().__init__(descriptor)
        self.api_key = api_key
        self.base_url = base_url
        self.simulation = simulation or SimulationConfig()

    async def analyze(self, memory: Memory, locale: Locale) -> AIAnalysis:
        logger.info(
            f"Simulating analysis with {self.model_id} (key {mask_secret(self.api_key)})"
        )
        await asyncio.sleep(self.simulation.analysis_delay)
        return prompts.simulated_analysis(self.model_id, locale)

    async def converse(self, query: str, context: str) -> str:
        await asyncio.sleep(self.simulation.chat_delay)
        return prompts.simulated_answer(self.model_id, query)

    async def build_graph(self, entries: list[GraphEntry]) -> GraphData:
        return GraphData(nodes=[], links=[])


class NativeProviderHandle(ProviderHandle):
    """Handle backed by a real transport with structured-output support."""

    provider_class = ProviderClass.NATIVE

    def __init__(self, descriptor: ModelDescriptor, transport: ProviderTransport):
        super().__init__(descriptor)
        self.transport = transport

    def _analysis_parts(self, memory: Memory, locale: Locale) -> list[ContentPart]:
        parts: list[ContentPart] = []
        if memory.media_blob is not None:
            mime_type = memory.media_mime_type or DEFAULT_MIME_TYPES[memory.media_type]
            parts.append(MediaPart(data=memory.media_blob, mime_type=mime_type))

        note = prompts.note_text(memory)
        if note:
            parts.append(TextPart(text=note))

        parts.append(TextPart(text=prompts.analysis_instruction(locale)))
        return parts

    async def analyze(self, memory: Memory, locale: Locale) -> AIAnalysis:
        raw = await self.transport.generate(
            self._analysis_parts(memory, locale), response_schema=AnalysisPayload
        )
        try:
            payload = parse_structured(raw, AnalysisPayload)
        except MalformedProviderOutputError as e:
            logger.warning(f"Unparseable analysis from {self.model_id}, using fallback: {e}")
            return prompts.fallback_analysis(self.model_id, locale)
        return payload.to_analysis(self.model_id)

    async def converse(self, query: str, context: str) -> str:
        answer = await self.transport.generate(
            [TextPart(text=query)],
            system_instruction=prompts.conversation_instruction(context),
        )
        return answer or prompts.EMPTY_ANSWER

    async def build_graph(self, entries: list[GraphEntry]) -> GraphData:
        raw = await self.transport.generate(
            [TextPart(text=prompts.graph_prompt(entries))], response_schema=GraphData
        )
        try:
            return parse_structured(raw, GraphData)
        except MalformedProviderOutputError as e:
            logger.warning(f"Unparseable graph from {self.model_id}, returning empty graph: {e}")
            return GraphData(nodes=[], links=[])

    async def close(self) -> None:
        await self.transport.close()
