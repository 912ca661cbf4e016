"""
Provider transport layer for native handles.

Supported backends:
- OpenAI-compatible endpoints (official SDK; Gemini by default)
- Ollama (native SDK)
"""
from lifelog.core.transport.base import ContentPart, MediaPart, ProviderTransport, TextPart
from lifelog.core.transport.ollama import OllamaTransport
from lifelog.core.transport.openai import OpenAITransport

__all__ = [
    "ContentPart",
    "MediaPart",
    "TextPart",
    "ProviderTransport",
    "OllamaTransport",
    "OpenAITransport",
]
