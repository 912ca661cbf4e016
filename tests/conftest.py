"""
Shared test fixtures for all test modules.

Provider calls go through FakeTransport, so no test touches the network.
"""

from datetime import datetime

import pytest

from lifelog.config import Config, ProviderConfig, SimulationConfig
from lifelog.core.catalog import SUPPORTED_MODELS
from lifelog.core.providers.handles import GenericProviderHandle, NativeProviderHandle
from lifelog.core.providers.registry import ProviderRegistry
from lifelog.core.record_store.memory_store import InMemoryRecordStore
from lifelog.core.transport.base import ProviderTransport
from lifelog.models.catalog import ModelConfigSet, UserModelConfig
from lifelog.models.memory import AIAnalysis, MediaType, Memory

NATIVE_MODEL = "gemini-2.5-flash"
GENERIC_MODEL = "deepseek-chat"


class FakeTransport(ProviderTransport):
    """Transport returning canned responses and recording every call."""

    def __init__(self, responses: list[str] | None = None, error: Exception | None = None):
        self.model = NATIVE_MODEL
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[dict] = []
        self.closed = False

    async def generate(self, parts, response_schema=None, system_instruction=None, **kwargs):
        self.calls.append(
            {
                "parts": parts,
                "response_schema": response_schema,
                "system_instruction": system_instruction,
            }
        )
        if self.error is not None:
            raise self.error
        return self.responses.pop(0) if self.responses else ""

    async def close(self):
        self.closed = True


def catalog_entry(model_id: str):
    return next(d for d in SUPPORTED_MODELS if d.id == model_id)


@pytest.fixture
def no_delay() -> SimulationConfig:
    """Simulation settings without artificial latency."""
    return SimulationConfig(analysis_delay=0.0, chat_delay=0.0)


@pytest.fixture
def config(no_delay) -> Config:
    """Test configuration: in-memory store, no delays, no file logging."""
    config = Config()
    config.simulation = no_delay
    config.store.backend = "memory"
    config.logging.log_to_file = False
    return config


@pytest.fixture
def registry(no_delay) -> ProviderRegistry:
    """Registry with a default first-party key."""
    return ProviderRegistry(
        provider_config=ProviderConfig(default_api_key="default-key"),
        simulation_config=no_delay,
    )


@pytest.fixture
def generic_configs() -> ModelConfigSet:
    """Credentials for a non-first-party model."""
    return ModelConfigSet([UserModelConfig(model_id=GENERIC_MODEL, api_key="sk-deepseek")])


@pytest.fixture
def generic_handle(no_delay) -> GenericProviderHandle:
    return GenericProviderHandle(
        catalog_entry(GENERIC_MODEL), api_key="sk-deepseek", simulation=no_delay
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def native_handle(fake_transport) -> NativeProviderHandle:
    return NativeProviderHandle(catalog_entry(NATIVE_MODEL), fake_transport)


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def analysis() -> AIAnalysis:
    return AIAnalysis(
        mood="Calm",
        summary="A quiet walk by the river",
        tags=["walk", "river"],
        color="#3B82F6",
        analyzed_by_model=NATIVE_MODEL,
    )


@pytest.fixture
def text_memory() -> Memory:
    return Memory(
        id="mem_text",
        created_at=datetime(2024, 5, 1, 9, 30),
        content="Walked along the river this morning",
    )


@pytest.fixture
def image_memory() -> Memory:
    return Memory(
        id="mem_image",
        created_at=datetime(2024, 5, 2, 18, 0),
        content="Sunset from the balcony",
        media_type=MediaType.IMAGE,
        media_blob=b"\x89PNG fake image bytes",
        media_mime_type="image/png",
    )


@pytest.fixture
def analyzed_media_memory(analysis) -> Memory:
    """Media memory with no note but an attached analysis."""
    return Memory(
        id="mem_audio",
        created_at=datetime(2024, 5, 3, 7, 15),
        media_type=MediaType.AUDIO,
        media_blob=b"fake audio",
        media_mime_type="audio/webm",
        ai_analysis=analysis,
    )


@pytest.fixture
def bare_media_memory() -> Memory:
    """Media memory with neither a note nor an analysis."""
    return Memory(
        id="mem_video",
        created_at=datetime(2024, 5, 4, 12, 0),
        media_type=MediaType.VIDEO,
        media_blob=b"fake video",
        media_mime_type="video/mp4",
    )


@pytest.fixture
def memories(text_memory, image_memory, analyzed_media_memory, bare_media_memory) -> list[Memory]:
    return [text_memory, image_memory, analyzed_media_memory, bare_media_memory]


@pytest.fixture
def make_native_handle():
    """Build a native handle over a FakeTransport with canned responses."""

    def _make(responses: list[str] | None = None, error: Exception | None = None):
        transport = FakeTransport(responses, error)
        return NativeProviderHandle(catalog_entry(NATIVE_MODEL), transport), transport

    return _make


@pytest.fixture
def patch_transport(monkeypatch):
    """Make the registry hand out FakeTransports; returns the created transports."""
    created: list[FakeTransport] = []

    def _install(responses: list[str] | None = None, error: Exception | None = None):
        def _create(config, model_id, api_key, base_url=None):
            transport = FakeTransport(responses, error)
            transport.api_key = api_key
            transport.base_url = base_url
            created.append(transport)
            return transport

        monkeypatch.setattr(
            "lifelog.core.providers.registry.TransportFactory.create", staticmethod(_create)
        )
        return created

    return _install
