"""
Tests for ConversationEngine.
"""

import pytest

from lifelog.core.citations import CitationSegment
from lifelog.services.conversation_engine import ConversationEngine
from lifelog.utils.exceptions import TransportError


@pytest.fixture
def engine():
    return ConversationEngine()


@pytest.mark.unit
class TestBuildContext:
    def test_excludes_uncitable_memories(self, engine, memories):
        context = engine.build_context(memories)

        assert "[ID:mem_video]" not in context
        assert "[ID:mem_audio] - 2024-05-03: [Media]" in context


@pytest.mark.unit
@pytest.mark.asyncio
class TestAsk:
    async def test_native_answer_verbatim(self, engine, make_native_handle, memories):
        handle, transport = make_native_handle(["You walked by the river [[ID:mem_text]]."])

        answer = await engine.ask("Where did I walk?", memories, handle)

        assert answer == "You walked by the river [[ID:mem_text]]."
        system_instruction = transport.calls[0]["system_instruction"]
        assert "[ID:mem_text]" in system_instruction
        assert "mem_video" not in system_instruction

    async def test_generic_answer(self, engine, generic_handle, memories):
        answer = await engine.ask("What did I eat?", memories, generic_handle)

        assert "deepseek-chat" in answer
        assert "What did I eat?" in answer

    @pytest.mark.parametrize("query", ["", "   ", "\n"])
    async def test_blank_query_skips_provider(self, engine, make_native_handle, memories, query):
        handle, transport = make_native_handle(["should not be used"])

        assert await engine.ask(query, memories, handle) == ""
        assert transport.calls == []

    async def test_empty_provider_answer(self, engine, make_native_handle, memories):
        handle, _ = make_native_handle([""])
        assert await engine.ask("hi", memories, handle) == "..."

    async def test_transport_error_propagates(self, engine, make_native_handle, memories):
        handle, _ = make_native_handle(error=TransportError("timeout"))

        with pytest.raises(TransportError):
            await engine.ask("hi", memories, handle)


@pytest.mark.unit
@pytest.mark.asyncio
class TestAnswer:
    async def test_decodes_and_resolves_citations(self, engine, make_native_handle, memories):
        handle, _ = make_native_handle(["See [[ID:mem_text]] and [[ID:mem_gone]]."])

        answer = await engine.answer("?", memories, handle)

        assert answer.cited_ids == ["mem_text", "mem_gone"]
        assert answer.unresolved_ids == ["mem_gone"]
        citations = [s for s in answer.segments if isinstance(s, CitationSegment)]
        assert [c.resolved for c in citations] == [True, False]
        assert "".join(s.raw for s in answer.segments) == answer.text

    async def test_blank_query(self, engine, generic_handle, memories):
        answer = await engine.answer(" ", memories, generic_handle)

        assert answer.text == ""
        assert answer.cited_ids == []
