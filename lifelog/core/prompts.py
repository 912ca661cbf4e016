"""
Prompt and context builders shared by provider handles.

Everything here is pure text assembly so it can be tested without a
transport.
"""

import json

from lifelog.models.graph import GraphEntry
from lifelog.models.locale import Locale
from lifelog.models.memory import AIAnalysis, MediaType, Memory

LANGUAGE_INSTRUCTIONS = {
    Locale.ZH: "Use Chinese (Simplified).",
    Locale.EN: "Use English.",
}

FALLBACK_SUMMARIES = {
    Locale.ZH: "记录下这一刻。",
    Locale.EN: "Recording this moment.",
}

NEUTRAL_COLOR = "#E5E7EB"
SIMULATED_COLOR = "#888888"
EMPTY_ANSWER = "..."


def analysis_instruction(locale: Locale) -> str:
    """Instruction appended after the memory parts of an analysis request."""
    return (
        f"Analyze this memory. {LANGUAGE_INSTRUCTIONS[Locale(locale)]} "
        "Keep it philosophical and concise. Output pure JSON."
    )


def note_text(memory: Memory) -> str | None:
    """Text part describing the user's note, if there is one."""
    if memory.content.strip():
        return f"User Note: {memory.content}"
    if memory.media_type == MediaType.AUDIO:
        return "Analyze this audio content."
    return None


def fallback_analysis(model_id: str, locale: Locale) -> AIAnalysis:
    """Neutral analysis used when provider output cannot be parsed."""
    return AIAnalysis(
        mood="Reflective",
        summary=FALLBACK_SUMMARIES[Locale(locale)],
        tags=["Life"],
        color=NEUTRAL_COLOR,
        analyzed_by_model=model_id,
    )


def simulated_analysis(model_id: str, locale: Locale) -> AIAnalysis:
    """Placeholder analysis for generic handles, shaped like a real one."""
    locale = Locale(locale).value
    return AIAnalysis(
        mood="Simulated",
        summary=f"(By {model_id}) Analysis simulation. Language: {locale}",
        tags=["Simulation", model_id, locale],
        color=SIMULATED_COLOR,
        analyzed_by_model=model_id,
    )


def simulated_answer(model_id: str, query: str) -> str:
    """Acknowledgement returned by generic handles instead of a real answer."""
    return (
        f'[Simulation] ({model_id}) I am processing your request about "{query}". '
        "To enable real responses for this model, please integrate the provider's SDK."
    )


def context_line(memory: Memory) -> str | None:
    """
    One context line for a memory, or None when it cannot be cited.

    Format: ``[ID:<id>] - <date>: "<content>" [Summary: <summary>, Tags: <tags>]``
    with ``[Media]`` standing in for empty content.
    """
    if not memory.content and memory.ai_analysis is None:
        return None

    date = memory.created_at.strftime("%Y-%m-%d")
    content = f'"{memory.content}"' if memory.content else "[Media]"
    line = f"[ID:{memory.id}] - {date}: {content}"
    if memory.ai_analysis is not None:
        tags = ",".join(memory.ai_analysis.tags)
        line += f" [Summary: {memory.ai_analysis.summary}, Tags: {tags}]"
    return line


def memory_context(memories: list[Memory]) -> str:
    """Context block listing every citable memory, one per line."""
    lines = (context_line(memory) for memory in memories)
    return "\n".join(line for line in lines if line is not None)


def conversation_instruction(context: str) -> str:
    """System instruction for answering questions about the user's memories."""
    return f"""You are "LifeLog". Answer based only on the user's memories listed below.
Cite every memory you rely on using [[ID:memory-id]], e.g. [[ID:mem_123]].
Language: detect it from the user's query and answer in the same language.
If the memories do not contain the answer, say so.
Context:
{context}"""


def graph_entries(memories: list[Memory]) -> list[GraphEntry]:
    """Per-memory metadata sent when building a relationship graph."""
    return [
        GraphEntry(
            id=memory.id,
            summary=memory.describe(),
            tags=list(memory.ai_analysis.tags) if memory.ai_analysis else [],
        )
        for memory in memories
    ]


def graph_prompt(entries: list[GraphEntry]) -> str:
    """Prompt asking the provider for related nodes and links."""
    data = json.dumps([entry.model_dump() for entry in entries], ensure_ascii=False)
    return f"""Analyze the relationships between these memory nodes.
Return a JSON object with 'nodes' (use original IDs) and 'links'.
Nodes should have a 'label', a 'group' (a theme name) and 'val' (importance 1-5).
You may leave out memories that are unrelated to any other.
Links should connect related memories and have a short 'reason'.
Input Data: {data}"""


def extract_json(content: str) -> str:
    """Strip markdown code fences around a JSON payload."""
    content = content.strip()
    if "```json" in content:
        content = content.split("```json")[1].split("```")[0].strip()
    elif "```" in content:
        content = content.split("```")[1].split("```")[0].strip()
    return content
