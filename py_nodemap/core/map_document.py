"""
Map document parsing.

Extracts node locations and decoration polygons from a minimal SVG-like
document:
- every <circle> contributes a node at (cx, cy)
- every <path> contributes a filled decoration polygon

Only the subset of SVG needed for that is understood; other elements are
ignored but their children are still visited.
"""

import math
import re
import xml.etree.ElementTree as ET
from typing import List, NamedTuple, Optional, Tuple, Union

import structlog

from .geometry import Point

logger = structlog.get_logger()

_PATH_TOKEN_RE = re.compile(
    r"([A-Za-z])|([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)|([\s,]+)|(.)"
)

SUPPORTED_PATH_COMMANDS = "MmLlHhVvZz"


class MapDocumentError(ValueError):
    """Base class for map document failures."""


class DocumentParseError(MapDocumentError):
    """The markup itself is malformed."""


class PathCommandParseError(MapDocumentError):
    """A <path> element has an unusable d attribute or fill color."""


class Decoration(NamedTuple):
    """A cosmetic filled polygon."""
    polygon: Tuple[Point, ...]
    color: str


DecorationSet = Tuple[Decoration, ...]


class MapDocument(NamedTuple):
    """Everything a document contributes to a map."""
    nodes: List[Point]
    decorations: DecorationSet


def _local_tag(tag: str) -> str:
    """Strip namespace from an element tag."""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def parse_markup(document: Union[str, bytes, ET.Element]) -> ET.Element:
    """
    Turn document text into an element tree.

    Raises:
        DocumentParseError: If the markup is not well-formed
    """
    if isinstance(document, ET.Element):
        return document
    try:
        return ET.fromstring(document)
    except (ET.ParseError, LookupError, ValueError) as e:
        # Expat reports unknown or multi-byte encoding declarations as
        # LookupError and ValueError
        raise DocumentParseError(f"Malformed map document: {e}") from e


def _tokenize_path(d: str) -> List[Union[str, float]]:
    tokens: List[Union[str, float]] = []
    for match in _PATH_TOKEN_RE.finditer(d):
        command, number, _separator, junk = match.groups()
        if junk is not None:
            raise PathCommandParseError(f"Unexpected character {junk!r} in path data")
        if command is not None:
            if command not in SUPPORTED_PATH_COMMANDS:
                raise PathCommandParseError(f"Unsupported path command {command!r}")
            tokens.append(command)
        elif number is not None:
            tokens.append(float(number))
    return tokens


def parse_path_data(d: str) -> Tuple[Point, ...]:
    """
    Decode an SVG path d attribute into polygon points.

    Supports absolute and relative moveto, lineto, horizontal, vertical and
    closepath commands. Extra coordinate pairs after a moveto are treated as
    linetos, as in SVG. Closing a path does not repeat its first point.

    Args:
        d: Path data string

    Returns:
        Ordered polygon points

    Raises:
        PathCommandParseError: For unsupported commands, missing arguments or
            path data without any points
    """
    tokens = _tokenize_path(d)
    points: List[Point] = []
    current = Point(0.0, 0.0)
    start = current
    command: Optional[str] = None
    i = 0

    def _next_number() -> float:
        nonlocal i
        if i >= len(tokens) or isinstance(tokens[i], str):
            raise PathCommandParseError(f"Command {command!r} is missing arguments")
        value = tokens[i]
        i += 1
        return value

    while i < len(tokens):
        token = tokens[i]
        if isinstance(token, str):
            command = token
            i += 1
            if command in "Zz":
                current = start
                continue
        elif command is None:
            raise PathCommandParseError("Path data must start with a command")
        elif command in "Zz":
            raise PathCommandParseError("Numbers after closepath")

        relative = command.islower()
        upper = command.upper()

        if upper in "ML":
            x, y = _next_number(), _next_number()
            if relative:
                x += current.x
                y += current.y
            current = Point(x, y)
            if upper == "M":
                start = current
                # Subsequent pairs are implicit linetos
                command = "l" if relative else "L"
        elif upper == "H":
            x = _next_number()
            current = Point(current.x + x if relative else x, current.y)
        elif upper == "V":
            y = _next_number()
            current = Point(current.x, current.y + y if relative else y)

        points.append(current)

    if not points:
        raise PathCommandParseError(f"Path data {d!r} contains no points")

    return tuple(points)


def parse_fill_color(element: ET.Element) -> str:
    """
    Read an element's fill color from its style or fill attribute.

    Raises:
        PathCommandParseError: If no usable fill color is present
    """
    style = element.get("style", "")
    for part in style.split(";"):
        name, _, value = part.partition(":")
        if name.strip() == "fill":
            value = value.strip()
            if value and value != "none":
                return value

    fill = (element.get("fill") or "").strip()
    if fill and fill != "none":
        return fill

    raise PathCommandParseError(f"Path {element.get('id', '<unnamed>')} has no fill color")


def _parse_circle(element: ET.Element) -> Optional[Point]:
    try:
        x, y = float(element.get("cx")), float(element.get("cy"))
    except (TypeError, ValueError):
        logger.debug("Skipping circle without numeric center",
                     cx=element.get("cx"), cy=element.get("cy"))
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        logger.debug("Skipping circle with non-finite center",
                     cx=element.get("cx"), cy=element.get("cy"))
        return None
    return Point(x, y)


def extract_node_locations(root: ET.Element) -> List[Point]:
    """Node locations from every circle, in document order."""
    nodes = []
    for element in root.iter():
        if _local_tag(element.tag) != "circle":
            continue
        point = _parse_circle(element)
        if point is not None:
            nodes.append(point)
    return nodes


def extract_decorations(root: ET.Element) -> DecorationSet:
    """
    Decoration polygons from every path, in document order.

    All-or-nothing: the first bad path aborts the whole extraction.

    Raises:
        PathCommandParseError: If any path cannot be decoded
    """
    decorations = []
    for element in root.iter():
        if _local_tag(element.tag) != "path":
            continue
        d = element.get("d")
        if d is None:
            raise PathCommandParseError(f"Path {element.get('id', '<unnamed>')} has no d attribute")
        decorations.append(Decoration(parse_path_data(d), parse_fill_color(element)))
    return tuple(decorations)


def parse_document(document: Union[str, bytes, ET.Element]) -> MapDocument:
    """
    Parse a map document into node locations and decorations.

    Args:
        document: Markup text or a parsed root element

    Returns:
        MapDocument with nodes in traversal order (this order assigns node ids)

    Raises:
        DocumentParseError: If the markup is malformed
        PathCommandParseError: If any path's d or fill cannot be parsed
    """
    root = parse_markup(document)
    nodes = extract_node_locations(root)
    decorations = extract_decorations(root)

    logger.info("Map document parsed", nodes=len(nodes), decorations=len(decorations))

    return MapDocument(nodes, decorations)
