"""Pathfinding Visualizer - stepwise grid search with a live view.

This package implements A* (plus Dijkstra and breadth-first variants) over a
uniform-cost grid, exposed one expansion at a time so a host can animate it.
"""

__version__ = "1.0.0"
__author__ = "Pathfinding Visualizer"
