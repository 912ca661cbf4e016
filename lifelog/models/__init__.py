"""
Data models for LifeLog.

Core models:
- Memory, MediaType: captured notes and their media
- AIAnalysis, AnalysisPayload: per-memory analysis and its provider schema
- ModelDescriptor, ModelCapability, ProviderClass: model catalog entries
- UserModelConfig, ModelConfigSet: per-model credentials
- GraphNode, GraphLink, GraphData, PositionedNode, GraphEntry: relationship graph
- Locale: supported answer languages
"""

from lifelog.models.catalog import (
    ModelCapability,
    ModelConfigSet,
    ModelDescriptor,
    ProviderClass,
    UserModelConfig,
)
from lifelog.models.graph import GraphData, GraphEntry, GraphLink, GraphNode, PositionedNode
from lifelog.models.locale import Locale
from lifelog.models.memory import AIAnalysis, AnalysisPayload, MediaType, Memory

__all__ = [
    # Memory models
    "Memory",
    "MediaType",
    "AIAnalysis",
    "AnalysisPayload",
    # Catalog models
    "ModelCapability",
    "ModelDescriptor",
    "ProviderClass",
    "UserModelConfig",
    "ModelConfigSet",
    # Graph models
    "GraphNode",
    "GraphLink",
    "GraphData",
    "GraphEntry",
    "PositionedNode",
    # Locale
    "Locale",
]
