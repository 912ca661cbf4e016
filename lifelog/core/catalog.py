"""
Static catalog of supported models.
"""

from lifelog.models.catalog import ModelCapability, ModelDescriptor

_ALL_MODALITIES = (
    ModelCapability.TEXT,
    ModelCapability.IMAGE,
    ModelCapability.AUDIO,
    ModelCapability.VIDEO,
)

SUPPORTED_MODELS: tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id="gemini-2.5-flash",
        name="Gemini 2.5 Flash",
        provider="Google",
        capabilities=_ALL_MODALITIES,
        description="Fast all-rounder, supports every modality.",
    ),
    ModelDescriptor(
        id="gemini-2.5-pro",
        name="Gemini 2.5 Pro",
        provider="Google",
        capabilities=_ALL_MODALITIES,
        description="Stronger reasoning, suited to complex analysis.",
    ),
    ModelDescriptor(
        id="deepseek-chat",
        name="DeepSeek V3",
        provider="DeepSeek",
        capabilities=(ModelCapability.TEXT,),
        description="Strong Chinese reasoning and coding.",
    ),
    ModelDescriptor(
        id="qwen-max",
        name="Qwen-Max",
        provider="Alibaba",
        capabilities=(ModelCapability.TEXT, ModelCapability.IMAGE),
        description="Flagship Qwen model with image understanding.",
    ),
    ModelDescriptor(
        id="moonshot-v1-8k",
        name="Kimi (Moonshot)",
        provider="Moonshot",
        capabilities=(ModelCapability.TEXT,),
        description="Good at long-form reading and summarization.",
    ),
    ModelDescriptor(
        id="glm-4",
        name="GLM-4",
        provider="ZhipuAI",
        capabilities=(ModelCapability.TEXT, ModelCapability.IMAGE),
        description="General-purpose foundation model.",
    ),
)

GENERIC_PROVIDER = "Other"


def generic_profile(model_id: str) -> ModelDescriptor:
    """Capability profile assumed for ids missing from the catalog."""
    return ModelDescriptor(
        id=model_id,
        name=model_id,
        provider=GENERIC_PROVIDER,
        capabilities=(ModelCapability.TEXT,),
        description="",
    )
