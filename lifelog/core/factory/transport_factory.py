"""
Factory for creating provider transports.
"""

from lifelog.config import TransportConfig
from lifelog.core.transport.base import ProviderTransport
from lifelog.core.transport.ollama import OllamaTransport
from lifelog.core.transport.openai import OpenAITransport
from lifelog.utils.exceptions import ConfigurationError


class TransportFactory:
    """Factory for creating transports for native handles."""

    @staticmethod
    def create(
        config: TransportConfig,
        model_id: str,
        api_key: str | None,
        base_url: str | None = None,
    ) -> ProviderTransport:
        """
        Create a transport bound to one model and credential.

        Args:
            config: Transport configuration
            model_id: Model id sent with each request
            api_key: Resolved credential
            base_url: Per-model endpoint override (falls back to config.base_url,
                then to the transport's own default)

        Returns:
            Transport instance

        Raises:
            ConfigurationError: If the backend is not supported or a key is missing
        """
        endpoint = base_url or config.base_url

        if config.backend == "openai":
            if not api_key:
                raise ConfigurationError(
                    "OpenAI-compatible transport requires an API key",
                    context={"model": model_id},
                )
            return OpenAITransport(
                api_key=api_key,
                model=model_id,
                base_url=endpoint,
                timeout=config.timeout,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            )
        elif config.backend == "ollama":
            return OllamaTransport(
                model=model_id,
                host=endpoint,
                timeout=config.timeout,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            )
        else:
            raise ConfigurationError(f"Unsupported transport backend: {config.backend}")
