"""
Graph builder: derives a relationship graph between memories.
"""

import time

from lifelog.core import prompts
from lifelog.core.providers.handles import ProviderHandle
from lifelog.models.graph import GraphData, GraphEntry, GraphLink, GraphNode
from lifelog.models.memory import Memory
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)

LABEL_LENGTH = 24


class GraphBuilder:
    """
    Builds graphs from provider output without inventing nodes or links.

    Generic handles yield an empty graph, which callers render as an
    "insufficient data" state.
    """

    async def build(self, memories: list[Memory], handle: ProviderHandle) -> GraphData:
        """
        Build a relationship graph.

        Args:
            memories: Memories to relate
            handle: Resolved provider handle

        Returns:
            Graph restricted to input memories, with dangling and self links removed

        Raises:
            TransportError: If the provider call fails
        """
        if not memories:
            return GraphData(nodes=[], links=[])

        entries = prompts.graph_entries(memories)

        start_time = time.time()
        raw = await handle.build_graph(entries)
        graph = self.sanitize(raw, entries)
        elapsed = (time.time() - start_time) * 1000

        logger.info(
            f"Built graph with {len(graph.nodes)} nodes and {len(graph.links)} links "
            f"using {handle.model_id} in {elapsed:.0f}ms"
        )
        return graph

    def sanitize(self, graph: GraphData, entries: list[GraphEntry]) -> GraphData:
        """
        Restrict provider output to a consistent graph.

        - nodes must reference an input memory; the first occurrence of an id wins
        - empty labels are filled from the memory description
        - links must connect two returned nodes and not loop on one node
        """
        summaries = {entry.id: entry.summary for entry in entries}

        nodes: list[GraphNode] = []
        seen: set[str] = set()
        for node in graph.nodes:
            if node.id not in summaries or node.id in seen:
                continue
            seen.add(node.id)
            if not node.label:
                node = node.model_copy(update={"label": summaries[node.id][:LABEL_LENGTH]})
            nodes.append(node)

        links: list[GraphLink] = []
        for link in graph.links:
            if link.source not in seen or link.target not in seen:
                logger.debug(f"Dropping link {link.source}->{link.target}: unknown node")
                continue
            if link.source == link.target:
                continue
            links.append(link)

        dropped = (len(graph.nodes) - len(nodes), len(graph.links) - len(links))
        if any(dropped):
            logger.debug(f"Sanitized graph: dropped {dropped[0]} nodes, {dropped[1]} links")

        return GraphData(nodes=nodes, links=links)
