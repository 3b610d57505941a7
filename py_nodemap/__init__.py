"""
Node-and-edge map game core.

Builds a navigable graph from node locations, prunes crossing edges, and
moves a player between adjacent nodes.
"""

__version__ = "0.1.0"
