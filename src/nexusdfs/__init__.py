"""Lineup valuation and selection for captain-format MOBA DFS contests."""

__version__ = "0.1.0"
