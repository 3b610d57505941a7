#!/usr/bin/env python3
"""
Simple demo script walking a player across the built-in maps.
"""

from py_nodemap.core import build_view, default_world, load_world, move
from py_nodemap.core.world import current_node_id, outgoing_edges
from py_nodemap.utils.logging import configure_logging


def describe(title, state):
    """Print nodes, edges and what the player can reach."""
    print(f"\n{title}")
    print("-" * 30)
    view = build_view(state)
    print(f"  Nodes: {len(view.nodes)}  Edges: {len(view.edges)}  Decorations: {len(view.decorations)}")
    for node in view.nodes:
        print(f"  node {node.node_id} at ({node.location.x:g}, {node.location.y:g}): "
              f"{node.reachability.value}")


def main():
    """Demonstrate map construction and movement."""
    configure_logging(fmt="plain")

    print("Node Map Demo")
    print("=" * 40)

    state = default_world()
    describe("Hardcoded map", state)

    for target in (2, 1, 3):
        before = current_node_id(state)
        state = move(state, target)
        moved = current_node_id(state) != before
        print(f"  move {before} -> {target}: {'ok' if moved else 'blocked'}")

    describe("After walking", state)

    state = load_world()
    describe("Embedded document map", state)
    exits = [edge.destination for edge in outgoing_edges(state.graph, current_node_id(state))]
    print(f"  Exits from start: {exits}")


if __name__ == "__main__":
    main()
