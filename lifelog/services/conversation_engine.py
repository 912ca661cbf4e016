"""
Conversation engine: answers questions about the user's memories with citations.
"""

import time

from pydantic import BaseModel, Field

from lifelog.core import citations, prompts
from lifelog.core.citations import Segment
from lifelog.core.providers.handles import ProviderHandle
from lifelog.models.memory import Memory
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)


class ConversationAnswer(BaseModel):
    """Answer text plus its decoded citation segments."""

    text: str
    segments: list[Segment] = Field(default_factory=list)
    cited_ids: list[str] = Field(default_factory=list)
    unresolved_ids: list[str] = Field(default_factory=list)


class ConversationEngine:
    """Answers free-text queries against the full memory set."""

    def build_context(self, memories: list[Memory]) -> str:
        """Context block of every citable memory (content or analysis present)."""
        return prompts.memory_context(memories)

    async def ask(self, query: str, memories: list[Memory], handle: ProviderHandle) -> str:
        """
        Answer a query; the answer may embed ``[[ID:x]]`` citations.

        Args:
            query: User question (ignored when blank)
            memories: Full memory set
            handle: Resolved provider handle

        Returns:
            Provider answer verbatim, or "" for a blank query

        Raises:
            TransportError: If the provider call fails
        """
        if not query or not query.strip():
            logger.debug("Blank query, skipping provider call")
            return ""

        context = self.build_context(memories)
        logger.debug(f"Conversation context: {len(context.splitlines())} citable memories")

        start_time = time.time()
        answer = await handle.converse(query, context)
        elapsed = (time.time() - start_time) * 1000

        logger.info(f"Answered query with {handle.model_id} in {elapsed:.0f}ms")
        return answer

    async def answer(
        self, query: str, memories: list[Memory], handle: ProviderHandle
    ) -> ConversationAnswer:
        """Ask, then decode citations and check them against the memory set."""
        text = await self.ask(query, memories, handle)
        segments = citations.resolve(citations.decode(text), memories)

        cited = [s.memory_id for s in segments if isinstance(s, citations.CitationSegment)]
        unresolved = [
            s.memory_id
            for s in segments
            if isinstance(s, citations.CitationSegment) and not s.resolved
        ]
        if unresolved:
            logger.debug(f"{len(unresolved)} citations do not match any memory")

        return ConversationAnswer(
            text=text, segments=segments, cited_ids=cited, unresolved_ids=unresolved
        )
