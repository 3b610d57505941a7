"""
Core map construction and game state.
"""

from .geometry import Point, Vector, Direction, LineSegment
from .map_document import (
    Decoration, MapDocument, MapDocumentError, DocumentParseError,
    PathCommandParseError, parse_document,
)
from .graph_builder import Node, EdgeDirection, Graph, build_graph, nodes_from_locations
from .world import OnNode, Location, WorldState, init_world, move
from .view import ReachabilityClass, MapView, build_view, reachability_class
from .maps import default_world, empty_world, load_world

__all__ = ['Point', 'Vector', 'Direction', 'LineSegment',
           'Decoration', 'MapDocument', 'MapDocumentError', 'DocumentParseError',
           'PathCommandParseError', 'parse_document',
           'Node', 'EdgeDirection', 'Graph', 'build_graph', 'nodes_from_locations',
           'OnNode', 'Location', 'WorldState', 'init_world', 'move',
           'ReachabilityClass', 'MapView', 'build_view', 'reachability_class',
           'default_world', 'empty_world', 'load_world']
