"""Exceptions raised by ThesisFinder."""

from __future__ import annotations


class ThesisFinderError(Exception):
    """Base class for ThesisFinder errors."""


class InvalidCorpus(ThesisFinderError):
    """The supplied records cannot be installed as a corpus."""
