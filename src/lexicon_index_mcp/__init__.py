"""Lexicon Index MCP - exact-word dictionary lookup over an in-memory inverted index."""

__version__ = "0.1.0"
