"""Rank catalog entries through pairwise comparisons, alone or as a group."""

__version__ = "0.1.0"
