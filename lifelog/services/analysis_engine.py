"""
Analysis engine: turns one memory into a structured judgment.
"""

import time

from lifelog.core.providers.handles import ProviderHandle
from lifelog.models.locale import Locale
from lifelog.models.memory import AIAnalysis, Memory
from lifelog.utils.exceptions import EmptyInputError
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)


class AnalysisEngine:
    """
    Best-effort enrichment of a single memory.

    Malformed provider output degrades to a neutral fallback inside the
    handle; only empty input and transport failures raise.
    """

    async def analyze(
        self, memory: Memory, handle: ProviderHandle, locale: Locale = Locale.ZH
    ) -> AIAnalysis:
        """
        Analyze one memory.

        Args:
            memory: Memory with content and/or media
            handle: Resolved provider handle
            locale: Language of the analysis

        Returns:
            Analysis stamped with the handle's model id (not persisted)

        Raises:
            EmptyInputError: If the memory has neither content nor media
            TransportError: If the provider call fails
        """
        if not memory.has_input():
            raise EmptyInputError("Empty memory", context={"id": memory.id})

        if not handle.descriptor.supports(memory.media_type):
            logger.warning(
                f"{handle.model_id} does not declare {memory.media_type.value} support"
            )

        start_time = time.time()
        analysis = await handle.analyze(memory, Locale(locale))
        elapsed = (time.time() - start_time) * 1000

        logger.info(
            f"Analyzed memory {memory.id} with {handle.model_id} "
            f"({handle.provider_class.value}) in {elapsed:.0f}ms"
        )
        return analysis
