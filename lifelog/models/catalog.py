"""
Model catalog and per-model credential models.
"""

from collections.abc import Iterable, Iterator
from enum import Enum

from pydantic import BaseModel, Field

from lifelog.models.memory import MediaType


class ModelCapability(str, Enum):
    """Modalities a model can accept."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


class ProviderClass(str, Enum):
    """How a resolved handle talks to its backend."""

    NATIVE = "native"  # real transport with structured output
    GENERIC = "generic"  # deterministic simulation, no network


class ModelDescriptor(BaseModel):
    """Static catalog entry. Read-only at runtime."""

    model_config = {"frozen": True}

    id: str
    name: str
    provider: str
    capabilities: tuple[ModelCapability, ...] = (ModelCapability.TEXT,)
    description: str = ""

    def supports(self, media_type: MediaType) -> bool:
        """Whether the model declares support for a memory's media type."""
        return ModelCapability(media_type.value.lower()) in self.capabilities


class UserModelConfig(BaseModel):
    """Per-model credential override supplied by the user."""

    model_id: str = Field(..., description="Catalog model id")
    api_key: str = Field(..., description="API key for this model")
    base_url: str | None = Field(default=None, description="Optional compatible endpoint")


class ModelConfigSet:
    """
    Per-model credentials, at most one per model id (last write wins).

    Passed explicitly into every resolve call; never stored globally.
    """

    def __init__(self, configs: Iterable[UserModelConfig] | None = None):
        self._configs: dict[str, UserModelConfig] = {}
        for config in configs or []:
            self.upsert(config)

    def upsert(self, config: UserModelConfig) -> None:
        """Insert or replace the config for its model id."""
        self._configs[config.model_id] = config

    def get(self, model_id: str) -> UserModelConfig | None:
        return self._configs.get(model_id)

    def remove(self, model_id: str) -> None:
        self._configs.pop(model_id, None)

    def __iter__(self) -> Iterator[UserModelConfig]:
        return iter(self._configs.values())

    def __len__(self) -> int:
        return len(self._configs)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._configs
