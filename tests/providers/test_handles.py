"""
Tests for provider handles: structured parsing, fallbacks and simulation.
"""

import json

import pytest

from lifelog.core.providers.handles import parse_structured
from lifelog.core.transport.base import MediaPart, TextPart
from lifelog.models.graph import GraphData
from lifelog.models.locale import Locale
from lifelog.models.memory import AnalysisPayload, Memory
from lifelog.utils.exceptions import MalformedProviderOutputError, TransportError

VALID_ANALYSIS = json.dumps(
    {"mood": "Nostalgic", "summary": "Time moves on.", "tags": ["home"], "color": "#F59E0B"}
)


@pytest.mark.unit
class TestParseStructured:
    def test_valid(self):
        payload = parse_structured(VALID_ANALYSIS, AnalysisPayload)
        assert payload.mood == "Nostalgic"

    def test_fenced(self):
        payload = parse_structured(f"```json\n{VALID_ANALYSIS}\n```", AnalysisPayload)
        assert payload.tags == ["home"]

    @pytest.mark.parametrize("raw", ["", "   ", "not json", '{"mood": "x"}', "[1, 2]"])
    def test_malformed(self, raw):
        with pytest.raises(MalformedProviderOutputError):
            parse_structured(raw, AnalysisPayload)


@pytest.mark.unit
class TestNativeAnalyze:
    @pytest.mark.asyncio
    async def test_parses_payload(self, make_native_handle, text_memory):
        handle, _ = make_native_handle([VALID_ANALYSIS])

        analysis = await handle.analyze(text_memory, Locale.EN)

        assert analysis.mood == "Nostalgic"
        assert analysis.analyzed_by_model == "gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_invalid_json_falls_back(self, make_native_handle, text_memory):
        handle, _ = make_native_handle(["I think this memory is lovely"])

        analysis = await handle.analyze(text_memory, Locale.ZH)

        assert analysis.mood == "Reflective"
        assert analysis.summary == "记录下这一刻。"
        assert analysis.analyzed_by_model == "gemini-2.5-flash"

    @pytest.mark.asyncio
    async def test_empty_output_falls_back(self, make_native_handle, text_memory):
        handle, _ = make_native_handle([""])

        analysis = await handle.analyze(text_memory, Locale.EN)

        assert analysis.summary == "Recording this moment."

    @pytest.mark.asyncio
    async def test_parts_order_for_media(self, make_native_handle, image_memory):
        handle, transport = make_native_handle([VALID_ANALYSIS])

        await handle.analyze(image_memory, Locale.EN)

        call = transport.calls[0]
        media, note, instruction = call["parts"]
        assert isinstance(media, MediaPart)
        assert media.mime_type == "image/png"
        assert note == TextPart(text="User Note: Sunset from the balcony")
        assert "Use English." in instruction.text
        assert call["response_schema"] is AnalysisPayload

    @pytest.mark.asyncio
    async def test_default_mime_type(self, make_native_handle):
        handle, transport = make_native_handle([VALID_ANALYSIS])
        memory = Memory(id="m", media_type="IMAGE", media_blob=b"jpeg")

        await handle.analyze(memory, Locale.EN)

        assert transport.calls[0]["parts"][0].mime_type == "image/jpeg"
        assert len(transport.calls[0]["parts"]) == 2

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, make_native_handle, text_memory):
        handle, _ = make_native_handle(error=TransportError("boom"))

        with pytest.raises(TransportError):
            await handle.analyze(text_memory, Locale.EN)


@pytest.mark.unit
class TestNativeConverseAndGraph:
    @pytest.mark.asyncio
    async def test_converse_sends_context_as_system_instruction(self, make_native_handle):
        handle, transport = make_native_handle(["You walked [[ID:mem_text]]."])

        answer = await handle.converse("Where did I walk?", "CTX")

        assert answer == "You walked [[ID:mem_text]]."
        assert transport.calls[0]["parts"] == [TextPart(text="Where did I walk?")]
        assert transport.calls[0]["system_instruction"].endswith("CTX")

    @pytest.mark.asyncio
    async def test_empty_answer_becomes_ellipsis(self, make_native_handle):
        handle, _ = make_native_handle([""])
        assert await handle.converse("hi", "") == "..."

    @pytest.mark.asyncio
    async def test_build_graph(self, make_native_handle):
        raw = json.dumps(
            {
                "nodes": [{"id": "a", "label": "A", "group": "Work", "val": 2}],
                "links": [],
            }
        )
        handle, transport = make_native_handle([raw])

        graph = await handle.build_graph([])

        assert graph.nodes[0].id == "a"
        assert transport.calls[0]["response_schema"] is GraphData

    @pytest.mark.asyncio
    async def test_malformed_graph_is_empty(self, make_native_handle):
        handle, _ = make_native_handle(["no graph today"])
        graph = await handle.build_graph([])
        assert graph.is_empty

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, make_native_handle):
        handle, transport = make_native_handle()

        async with handle:
            pass

        assert transport.closed


@pytest.mark.unit
class TestGenericHandle:
    @pytest.mark.asyncio
    async def test_simulated_analysis(self, generic_handle, text_memory):
        analysis = await generic_handle.analyze(text_memory, Locale.ZH)

        assert analysis.analyzed_by_model == "deepseek-chat"
        assert "deepseek-chat" in analysis.summary
        assert "zh" in analysis.summary
        assert analysis.tags == ["Simulation", "deepseek-chat", "zh"]

    @pytest.mark.asyncio
    async def test_simulated_answer(self, generic_handle):
        answer = await generic_handle.converse("What did I eat?", "ctx")

        assert "deepseek-chat" in answer
        assert "What did I eat?" in answer

    @pytest.mark.asyncio
    async def test_graph_is_empty(self, generic_handle):
        graph = await generic_handle.build_graph([])
        assert graph == GraphData(nodes=[], links=[])

    def test_repr(self, generic_handle):
        assert repr(generic_handle) == "GenericProviderHandle(model_id='deepseek-chat')"
