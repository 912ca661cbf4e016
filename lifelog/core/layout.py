"""
Deterministic circular layout for relationship graphs.

Nodes are placed evenly on a circle in the order received; links do not
affect positions. The same input order always yields the same coordinates.
"""

import math

from lifelog.config import LayoutConfig
from lifelog.models.graph import GraphData, PositionedNode

DEFAULT_RADIUS = LayoutConfig.model_fields["radius"].default


def circular_layout(
    graph: GraphData,
    width: float,
    height: float,
    radius: float | None = None,
    center: tuple[float, float] | None = None,
) -> list[PositionedNode]:
    """
    Place node i at angle 2*pi*i/N on a circle.

    Args:
        graph: Graph whose nodes are positioned (not mutated)
        width: Viewport width
        height: Viewport height
        radius: Circle radius (default: LayoutConfig.radius)
        center: Circle center (default: viewport middle)

    Returns:
        Positioned copies of the nodes, in input order
    """
    count = len(graph.nodes)
    if count == 0:
        return []

    r = DEFAULT_RADIUS if radius is None else radius
    cx, cy = center if center is not None else (width / 2, height / 2)

    positioned = []
    for i, node in enumerate(graph.nodes):
        angle = 2 * math.pi * i / count
        positioned.append(
            PositionedNode(
                **node.model_dump(),
                x=cx + r * math.cos(angle),
                y=cy + r * math.sin(angle),
                angle=angle,
            )
        )
    return positioned
