"""2D geometry primitives for map construction and edge drawing."""

import math
from typing import NamedTuple, Optional


class Point(NamedTuple):
    """A location in map coordinates."""
    x: float
    y: float


class Vector(NamedTuple):
    """A displacement between two points."""
    dx: float
    dy: float


class Direction(NamedTuple):
    """A unit direction, stored as an angle in radians."""
    angle: float


class LineSegment(NamedTuple):
    """A finite segment between two points."""
    start: Point
    end: Point


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def vector_between(p1: Point, p2: Point) -> Vector:
    return Vector(p2.x - p1.x, p2.y - p1.y)


def direction_between(p1: Point, p2: Point) -> Optional[Direction]:
    """
    Direction pointing from p1 towards p2.

    Returns:
        Direction, or None when the points coincide
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    if dx == 0 and dy == 0:
        return None
    return Direction(math.atan2(dy, dx))


def rotate(direction: Direction, angle: float) -> Direction:
    """Rotate a direction counter-clockwise (in y-up terms) by angle radians."""
    return Direction(direction.angle + angle)


def scale_vector_to_length(direction: Direction, length: float) -> Vector:
    return Vector(math.cos(direction.angle) * length, math.sin(direction.angle) * length)


def translate(point: Point, vector: Vector) -> Point:
    return Point(point.x + vector.dx, point.y + vector.dy)


def scale_point_about(point: Point, pivot: Point, factor: float) -> Point:
    """Move point towards (factor < 1) or away from (factor > 1) pivot."""
    return Point(
        pivot.x + (point.x - pivot.x) * factor,
        pivot.y + (point.y - pivot.y) * factor,
    )


def segment_length(segment: LineSegment) -> float:
    return distance(segment.start, segment.end)


def segment_midpoint(segment: LineSegment) -> Point:
    return Point(
        (segment.start.x + segment.end.x) / 2,
        (segment.start.y + segment.end.y) / 2,
    )


def scale_segment_about_point(segment: LineSegment, pivot: Point, factor: float) -> LineSegment:
    """Scale both endpoints of a segment about pivot by factor."""
    return LineSegment(
        scale_point_about(segment.start, pivot, factor),
        scale_point_about(segment.end, pivot, factor),
    )


def segment_intersection(a: LineSegment, b: LineSegment) -> Optional[Point]:
    """
    Crossing point of two finite segments.

    Solves a.start + t * r == b.start + u * s and accepts only crossings with
    both parameters strictly inside (0, 1), so segments that merely touch at
    an endpoint do not intersect.

    Args:
        a: First segment
        b: Second segment

    Returns:
        Intersection point, or None for parallel, collinear, zero-length,
        endpoint-touching or non-crossing segments
    """
    r = vector_between(a.start, a.end)
    s = vector_between(b.start, b.end)

    denominator = r.dx * s.dy - r.dy * s.dx
    if denominator == 0:
        return None

    qp = vector_between(a.start, b.start)
    t = (qp.dx * s.dy - qp.dy * s.dx) / denominator
    u = (qp.dx * r.dy - qp.dy * r.dx) / denominator

    if 0 < t < 1 and 0 < u < 1:
        return Point(a.start.x + t * r.dx, a.start.y + t * r.dy)
    return None
