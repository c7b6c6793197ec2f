"""ThesisFinder - in-memory search and ranking over a thesis corpus."""

__version__ = "0.1.0"
