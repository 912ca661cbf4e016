"""
Memory Service - the single entry point for memory actions.

Brings together:
- Record store (save, list, delete)
- Provider registry (model id -> handle)
- Analysis, conversation and graph engines
"""

from datetime import datetime

from pydantic import BaseModel

from lifelog.config import Config
from lifelog.core.layout import circular_layout
from lifelog.core.providers.registry import ProviderRegistry
from lifelog.core.record_store.base import RecordStore
from lifelog.models.catalog import ModelConfigSet
from lifelog.models.graph import GraphData, PositionedNode
from lifelog.models.locale import Locale
from lifelog.models.memory import AIAnalysis, MediaType, Memory
from lifelog.services.analysis_engine import AnalysisEngine
from lifelog.services.conversation_engine import ConversationAnswer, ConversationEngine
from lifelog.services.graph_builder import GraphBuilder
from lifelog.utils.exceptions import EmptyInputError, NotFoundError, ValidationError
from lifelog.utils.id_generator import generate_memory_id
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)


class GraphView(BaseModel):
    """Graph plus the positions of its nodes."""

    graph: GraphData
    positions: list[PositionedNode]


class MemoryService:
    """
    Facade over storage and the analysis/conversation/graph engines.

    Credentials are passed per call as a ModelConfigSet; the service itself
    keeps no per-user state.
    """

    def __init__(
        self,
        store: RecordStore,
        registry: ProviderRegistry,
        config: Config,
    ):
        """
        Initialize Memory Service.

        Args:
            store: Record store for memories
            registry: Provider registry
            config: Configuration object
        """
        self.store = store
        self.registry = registry
        self.config = config

        self.analysis = AnalysisEngine()
        self.conversation = ConversationEngine()
        self.graph_builder = GraphBuilder()

    async def initialize(self) -> None:
        """Initialize the record store."""
        await self.store.initialize()
        logger.info("Memory Service ready")

    async def add_memory(
        self,
        content: str = "",
        media_type: MediaType = MediaType.TEXT,
        media_blob: bytes | None = None,
        media_mime_type: str | None = None,
        location: str | None = None,
    ) -> Memory:
        """
        Create and save a memory.

        Raises:
            EmptyInputError: If there is neither content nor media
            ValidationError: If media type and blob disagree
        """
        content = content or ""
        if not content.strip() and media_blob is None:
            raise EmptyInputError("A memory needs text or media")

        if media_blob is not None and media_type == MediaType.TEXT:
            raise ValidationError("Media blobs need a non-text media type")

        try:
            memory = Memory(
                id=generate_memory_id(),
                created_at=datetime.now(),
                content=content,
                media_type=media_type,
                media_blob=media_blob,
                media_mime_type=media_mime_type,
                location=location,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        await self.store.save(memory)
        logger.info(f"Saved memory {memory.id} ({memory.media_type.value})")
        return memory

    async def list_memories(self) -> list[Memory]:
        """All memories, newest first."""
        return await self.store.list_all()

    async def get_memory(self, memory_id: str) -> Memory:
        """
        Fetch one memory.

        Raises:
            NotFoundError: If the memory doesn't exist
        """
        memory = await self.store.get(memory_id)
        if memory is None:
            raise NotFoundError(f"Memory not found: {memory_id}", context={"id": memory_id})
        return memory

    async def delete_memory(self, memory_id: str) -> None:
        """
        Delete a memory and its media.

        Raises:
            NotFoundError: If the memory doesn't exist
        """
        deleted = await self.store.delete(memory_id)
        if not deleted:
            raise NotFoundError(f"Memory not found: {memory_id}", context={"id": memory_id})
        logger.info(f"Deleted memory {memory_id}")

    async def analyze_memory(
        self,
        memory_id: str,
        model_id: str,
        configs: ModelConfigSet | None = None,
        locale: Locale | None = None,
    ) -> Memory:
        """
        Analyze (or regenerate the analysis of) a memory and persist it.

        The latest finished analysis wins when calls overlap.

        Raises:
            NotFoundError: If the memory doesn't exist
            MissingCredentialError: If no key is configured for the model
            EmptyInputError: If the memory has nothing to analyze
            TransportError: If the provider call fails
        """
        memory = await self.get_memory(memory_id)
        locale = Locale(locale or self.config.default_locale)

        async with self.registry.resolve(model_id, configs) as handle:
            analysis = await self.analysis.analyze(memory, handle, locale)

        # Only the analysis field is replaced
        current = await self.get_memory(memory_id)
        updated = current.with_analysis(analysis)
        await self.store.save(updated)
        return updated

    async def edit_summary(self, memory_id: str, summary: str) -> Memory:
        """
        Manually edit the analysis summary; attribution is unchanged.

        Raises:
            NotFoundError: If the memory doesn't exist
            ValidationError: If the memory has not been analyzed yet
        """
        memory = await self.get_memory(memory_id)
        if memory.ai_analysis is None:
            raise ValidationError(
                "Memory has no analysis to edit", context={"id": memory_id}
            )

        analysis: AIAnalysis = memory.ai_analysis.with_summary(summary)
        updated = memory.with_analysis(analysis)
        await self.store.save(updated)
        return updated

    async def ask(
        self,
        query: str,
        model_id: str,
        configs: ModelConfigSet | None = None,
    ) -> ConversationAnswer:
        """
        Answer a question about all memories.

        Raises:
            MissingCredentialError: If no key is configured for the model
            TransportError: If the provider call fails
        """
        if not query or not query.strip():
            return ConversationAnswer(text="")

        memories = await self.store.list_all()
        async with self.registry.resolve(model_id, configs) as handle:
            return await self.conversation.answer(query, memories, handle)

    async def build_graph(
        self,
        model_id: str,
        configs: ModelConfigSet | None = None,
        width: float | None = None,
        height: float | None = None,
    ) -> GraphView:
        """
        Build and lay out the relationship graph of all memories.

        Raises:
            MissingCredentialError: If no key is configured for the model
            TransportError: If the provider call fails
        """
        memories = await self.store.list_all()
        async with self.registry.resolve(model_id, configs) as handle:
            graph = await self.graph_builder.build(memories, handle)

        layout = self.config.layout
        positions = circular_layout(
            graph,
            width=width if width is not None else layout.width,
            height=height if height is not None else layout.height,
            radius=layout.radius,
        )
        return GraphView(graph=graph, positions=positions)

    async def close(self) -> None:
        """Close the record store."""
        await self.store.close()
