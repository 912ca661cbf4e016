"""
Services for LifeLog.

High-level business logic services:
- AnalysisEngine: Structured analysis of a single memory
- ConversationEngine: Question answering with inline citations
- GraphBuilder: Relationship graph construction
- MemoryService: Unified interface for all memory actions
"""

from lifelog.services.analysis_engine import AnalysisEngine
from lifelog.services.conversation_engine import ConversationAnswer, ConversationEngine
from lifelog.services.graph_builder import GraphBuilder
from lifelog.services.memory_service import GraphView, MemoryService

__all__ = [
    "AnalysisEngine",
    "ConversationEngine",
    "ConversationAnswer",
    "GraphBuilder",
    "GraphView",
    "MemoryService",
]
