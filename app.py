"""
LifeLog FastAPI Application

A REST API server for the LifeLog memory-analysis core.
Provides endpoints for capturing memories, analyzing them, asking questions
about them and building their relationship graph.
"""

import base64
import binascii
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from lifelog.config import Config
from lifelog.core.factory import RecordStoreFactory
from lifelog.core.providers import ProviderRegistry
from lifelog.models import (
    AIAnalysis,
    Locale,
    MediaType,
    Memory,
    ModelConfigSet,
    UserModelConfig,
)
from lifelog.services.memory_service import MemoryService
from lifelog.utils.exceptions import (
    LifeLogError,
    MissingCredentialError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from lifelog.utils.logger import get_logger, setup_logging_from_config

# Global service instance
service: MemoryService | None = None
logger = get_logger(__name__)


# Pydantic models for API
class AddMemoryRequest(BaseModel):
    """Request model for adding a memory."""

    content: str = Field(default="", description="Text note")
    media_type: MediaType = Field(default=MediaType.TEXT)
    media_base64: str | None = Field(default=None, description="Base64-encoded media payload")
    media_mime_type: str | None = Field(default=None, description="Mime type of the media")
    location: str | None = None


class MemoryResult(BaseModel):
    """Memory without its binary payload."""

    id: str
    created_at: str
    content: str
    media_type: MediaType
    has_media: bool
    media_mime_type: str | None = None
    location: str | None = None
    ai_analysis: AIAnalysis | None = None


class ModelRequest(BaseModel):
    """Common fields for requests that talk to a model."""

    model_id: str = Field(..., description="Catalog model id (unknown ids are simulated)")
    model_configs: list[UserModelConfig] = Field(
        default_factory=list, description="Per-model credentials"
    )

    def config_set(self) -> ModelConfigSet:
        return ModelConfigSet(self.model_configs)


class AnalyzeRequest(ModelRequest):
    """Request model for analyzing a memory."""

    locale: Locale | None = None


class EditSummaryRequest(BaseModel):
    """Request model for a manual summary edit."""

    summary: str


class ChatRequest(ModelRequest):
    """Request model for asking about past memories."""

    query: str


class ChatResponse(BaseModel):
    """Answer with decoded citations."""

    text: str
    segments: list[dict[str, Any]]
    cited_ids: list[str]
    unresolved_ids: list[str]


class GraphRequest(ModelRequest):
    """Request model for building the relationship graph."""

    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service_initialized: bool
    record_store: str
    transport: str


def _to_result(memory: Memory) -> MemoryResult:
    return MemoryResult(
        id=memory.id,
        created_at=memory.created_at.isoformat(),
        content=memory.content,
        media_type=memory.media_type,
        has_media=memory.media_blob is not None,
        media_mime_type=memory.media_mime_type,
        location=memory.location,
        ai_analysis=memory.ai_analysis,
    )


def _to_http(e: LifeLogError) -> HTTPException:
    """Map core errors to HTTP errors."""
    if isinstance(e, MissingCredentialError):
        return HTTPException(status_code=401, detail=e.message)
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=e.message)
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=e.message)
    if isinstance(e, TransportError):
        return HTTPException(status_code=502, detail="Could not complete the request")
    return HTTPException(status_code=500, detail=e.message)


def _require_service() -> MemoryService:
    if not service:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global service

    config = Config.from_env()
    setup_logging_from_config(config.logging)

    logger.info("Starting LifeLog server")
    logger.info(
        f"Configuration: transport={config.transport.backend} ({config.transport.base_url or 'default endpoint'}), "
        f"store={config.store.backend}, locale={config.default_locale.value}"
    )

    registry = ProviderRegistry(
        provider_config=config.provider,
        transport_config=config.transport,
        simulation_config=config.simulation,
    )
    store = RecordStoreFactory.create(config.store)

    service = MemoryService(store=store, registry=registry, config=config)
    await service.initialize()
    logger.info("LifeLog service initialized")

    yield

    logger.info("Shutting down LifeLog server")
    await service.close()
    service = None
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title="LifeLog API",
    description="Multimedia memories with model-backed analysis, cited answers and graphs",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy" if service else "initializing",
        service_initialized=service is not None,
        record_store=type(service.store).__name__ if service else "none",
        transport=service.registry.transport_config.backend if service else "none",
    )


@app.get("/models")
async def list_models():
    """List catalog models with their capabilities and provider class."""
    current = _require_service()
    return [
        {
            **descriptor.model_dump(),
            "provider_class": current.registry.provider_class(descriptor.id).value,
        }
        for descriptor in current.registry.list_models()
    ]


@app.post("/memories", response_model=MemoryResult)
async def add_memory(request: AddMemoryRequest):
    """Capture a new memory (text and/or base64 media)."""
    current = _require_service()

    media_blob = None
    if request.media_base64:
        try:
            media_blob = base64.b64decode(request.media_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise HTTPException(status_code=400, detail="Invalid base64 media") from e

    try:
        memory = await current.add_memory(
            content=request.content,
            media_type=request.media_type,
            media_blob=media_blob,
            media_mime_type=request.media_mime_type,
            location=request.location,
        )
        return _to_result(memory)
    except LifeLogError as e:
        raise _to_http(e) from e


@app.get("/memories", response_model=list[MemoryResult])
async def list_memories():
    """List memories, newest first."""
    current = _require_service()
    try:
        return [_to_result(memory) for memory in await current.list_memories()]
    except LifeLogError as e:
        raise _to_http(e) from e


@app.get("/memories/{memory_id}", response_model=MemoryResult)
async def get_memory(memory_id: str):
    """Retrieve a specific memory by ID."""
    current = _require_service()
    try:
        return _to_result(await current.get_memory(memory_id))
    except LifeLogError as e:
        raise _to_http(e) from e


@app.get("/memories/{memory_id}/media")
async def get_memory_media(memory_id: str):
    """Stream the binary payload of a memory."""
    current = _require_service()
    try:
        memory = await current.get_memory(memory_id)
    except LifeLogError as e:
        raise _to_http(e) from e

    if memory.media_blob is None:
        raise HTTPException(status_code=404, detail="Memory has no media")
    return Response(
        content=memory.media_blob,
        media_type=memory.media_mime_type or "application/octet-stream",
    )


@app.delete("/memories/{memory_id}")
async def delete_memory(memory_id: str):
    """Delete a memory and its media."""
    current = _require_service()
    try:
        await current.delete_memory(memory_id)
        return {"id": memory_id, "deleted": True}
    except LifeLogError as e:
        raise _to_http(e) from e


@app.post("/memories/{memory_id}/analysis", response_model=MemoryResult)
async def analyze_memory(memory_id: str, request: AnalyzeRequest):
    """
    Generate (or regenerate) the analysis of a memory.

    Unparseable model output yields a neutral analysis rather than an error.
    """
    current = _require_service()
    try:
        memory = await current.analyze_memory(
            memory_id, request.model_id, request.config_set(), request.locale
        )
        return _to_result(memory)
    except LifeLogError as e:
        raise _to_http(e) from e


@app.put("/memories/{memory_id}/analysis/summary", response_model=MemoryResult)
async def edit_summary(memory_id: str, request: EditSummaryRequest):
    """Manually edit the summary of an existing analysis."""
    current = _require_service()
    try:
        return _to_result(await current.edit_summary(memory_id, request.summary))
    except LifeLogError as e:
        raise _to_http(e) from e


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """
    Ask a question about past memories.

    The answer may embed [[ID:memory-id]] citations; ``segments`` holds the
    decoded text/citation sequence.
    """
    current = _require_service()
    try:
        answer = await current.ask(request.query, request.model_id, request.config_set())
    except LifeLogError as e:
        raise _to_http(e) from e

    return ChatResponse(
        text=answer.text,
        segments=[segment.model_dump() for segment in answer.segments],
        cited_ids=answer.cited_ids,
        unresolved_ids=answer.unresolved_ids,
    )


@app.post("/graph")
async def build_graph(request: GraphRequest):
    """
    Build the relationship graph with circular layout positions.

    An empty graph means there is not enough data (or the model is simulated).
    """
    current = _require_service()
    try:
        view = await current.build_graph(
            request.model_id, request.config_set(), request.width, request.height
        )
    except LifeLogError as e:
        raise _to_http(e) from e

    return {**view.model_dump(), "insufficient_data": view.graph.is_empty}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "LifeLog API",
        "version": "1.0.0",
        "description": "Multimedia memories with model-backed analysis, cited answers and graphs",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
