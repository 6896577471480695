"""Bunch - switch a source tree between branch-specific file variants."""

__version__ = "0.1.0"
