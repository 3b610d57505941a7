"""
Built-in maps and the document-to-world pipeline.

Two maps ship with the package:
- a hardcoded five-node map without decorations
- an embedded SVG document with nodes and decorations

load_world never raises: malformed documents degrade to an empty map and bad
decorations degrade to an undecorated map.
"""

from typing import Optional, Union
import xml.etree.ElementTree as ET

import structlog

from ..config import settings
from .geometry import Point
from .graph_builder import Graph, build_graph, nodes_from_locations
from .map_document import (
    DocumentParseError,
    PathCommandParseError,
    extract_decorations,
    extract_node_locations,
    parse_markup,
)
from .world import WorldState, init_world

logger = structlog.get_logger()

DEFAULT_LOCATIONS = (
    Point(100, 100),
    Point(200, 90),
    Point(210, 200),
    Point(280, 160),
    Point(95, 200),
)

DEFAULT_MAP_DOCUMENT = """\
<svg xmlns="http://www.w3.org/2000/svg" width="420" height="380" viewBox="0 0 420 380">
  <path id="lake" d="M 150 225 L 200 212 L 240 238 L 215 262 L 165 258 Z" fill="#7fb2e5"/>
  <path id="forest" style="stroke:none;fill:#5a8f4e" d="m 20 320 h 110 v 40 h -110 z"/>
  <g id="villages">
    <circle cx="80" cy="80" r="10"/>
    <circle cx="200" cy="70" r="10"/>
    <circle cx="320" cy="90" r="10"/>
  </g>
  <g id="crossroads">
    <circle cx="140" cy="180" r="10"/>
    <circle cx="260" cy="170" r="10"/>
  </g>
  <circle cx="90" cy="290" r="10"/>
  <circle cx="220" cy="310" r="10"/>
  <circle cx="340" cy="280" r="10"/>
  <text x="10" y="20">Valley</text>
</svg>
"""


def empty_world() -> WorldState:
    """A world with no nodes, edges or decorations."""
    return init_world(Graph())


def default_world(threshold: Optional[float] = None) -> WorldState:
    """
    The hardcoded five-node map.

    Args:
        threshold: Exclusive maximum edge length, defaults to
            settings.plain_edge_distance_threshold
    """
    if threshold is None:
        threshold = settings.plain_edge_distance_threshold
    graph = build_graph(nodes_from_locations(DEFAULT_LOCATIONS), threshold=threshold)
    return init_world(graph)


def load_world(document: Union[str, bytes, ET.Element] = DEFAULT_MAP_DOCUMENT,
               threshold: Optional[float] = None) -> WorldState:
    """
    Build a world from a map document, degrading instead of failing.

    Nodes and decorations are extracted independently: a bad path drops every
    decoration but keeps the nodes, while malformed markup yields the empty
    world.

    Args:
        document: Markup text or parsed root element
        threshold: Exclusive maximum edge length, defaults to
            settings.edge_distance_threshold

    Returns:
        Initial WorldState for the map
    """
    try:
        root = parse_markup(document)
    except DocumentParseError as e:
        logger.warning("Map document unreadable, using empty map", error=str(e))
        return empty_world()

    locations = extract_node_locations(root)

    try:
        decorations = extract_decorations(root)
    except PathCommandParseError as e:
        logger.warning("Map decorations unreadable, dropping all decorations", error=str(e))
        decorations = ()

    graph = build_graph(nodes_from_locations(locations), threshold=threshold)

    logger.info("World loaded",
                nodes=len(graph.nodes),
                edges=len(graph.edges),
                decorations=len(decorations))

    return init_world(graph, decorations)
