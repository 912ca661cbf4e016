"""
Provider registry: maps a model id to its descriptor and a credentialed handle.
"""

from collections.abc import Iterable

from lifelog.config import ProviderConfig, SimulationConfig, TransportConfig
from lifelog.core.catalog import SUPPORTED_MODELS, generic_profile
from lifelog.core.factory.transport_factory import TransportFactory
from lifelog.core.providers.handles import (
    GenericProviderHandle,
    NativeProviderHandle,
    ProviderHandle,
)
from lifelog.models.catalog import ModelConfigSet, ModelDescriptor, ProviderClass
from lifelog.utils.exceptions import MissingCredentialError
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)


class ProviderRegistry:
    """
    Resolves model ids into provider handles.

    The catalog and provider settings are read-only after construction;
    per-user credentials are passed into every ``resolve`` call.
    """

    def __init__(
        self,
        catalog: Iterable[ModelDescriptor] = SUPPORTED_MODELS,
        provider_config: ProviderConfig | None = None,
        transport_config: TransportConfig | None = None,
        simulation_config: SimulationConfig | None = None,
    ):
        """
        Initialize provider registry.

        Args:
            catalog: Known model descriptors
            provider_config: Default credential and first-party provider family
            transport_config: Settings for transports created for native handles
            simulation_config: Delays used by generic handles
        """
        self._catalog = {descriptor.id: descriptor for descriptor in catalog}
        self.provider_config = provider_config or ProviderConfig()
        self.transport_config = transport_config or TransportConfig()
        self.simulation_config = simulation_config or SimulationConfig()

    def list_models(self) -> list[ModelDescriptor]:
        """Catalog entries in declaration order."""
        return list(self._catalog.values())

    def describe(self, model_id: str) -> ModelDescriptor:
        """Descriptor for a model id; unknown ids get a text-only generic profile."""
        return self._catalog.get(model_id) or generic_profile(model_id)

    def is_first_party(self, descriptor: ModelDescriptor) -> bool:
        return descriptor.provider == self.provider_config.first_party_provider

    def provider_class(self, model_id: str) -> ProviderClass:
        """Whether a model id would resolve to a native or generic handle."""
        if self.is_first_party(self.describe(model_id)):
            return ProviderClass.NATIVE
        return ProviderClass.GENERIC

    def resolve(self, model_id: str, configs: ModelConfigSet | None = None) -> ProviderHandle:
        """
        Resolve a model id into a handle.

        Credential order: the user's config for this model, then the default
        credential (first-party family only).

        Args:
            model_id: Model identifier (need not be in the catalog)
            configs: Per-model user credentials

        Returns:
            Native handle for the first-party family, generic handle otherwise

        Raises:
            MissingCredentialError: If no usable key exists for the model
        """
        descriptor = self.describe(model_id)
        user_config = configs.get(model_id) if configs is not None else None
        first_party = self.is_first_party(descriptor)

        api_key = user_config.api_key if user_config and user_config.api_key else None
        if api_key is None and first_party:
            api_key = self.provider_config.default_api_key

        if not api_key:
            raise MissingCredentialError(
                f"Please configure API Key for {model_id}",
                context={"model": model_id, "provider": descriptor.provider},
            )

        base_url = user_config.base_url if user_config else None

        if first_party:
            logger.debug(f"Resolved {model_id} to native handle")
            transport = TransportFactory.create(
                self.transport_config, model_id=model_id, api_key=api_key, base_url=base_url
            )
            return NativeProviderHandle(descriptor, transport)

        logger.debug(f"Resolved {model_id} to generic handle")
        return GenericProviderHandle(
            descriptor, api_key=api_key, base_url=base_url, simulation=self.simulation_config
        )
