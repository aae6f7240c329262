"""Chronos - relevance-ranked narrative context for generative drafting."""

__version__ = "0.1.0"
