"""Nolu: match-record statistics service."""

__version__ = "1.0.0"
