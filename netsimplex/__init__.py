"""Minimum-cost flow by the network simplex method: graph model, solver and command line."""

__version__ = "0.1.0"
__all__ = ["graph", "simplex", "cli"]