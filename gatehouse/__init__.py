"""Gatehouse: session-based authentication API."""

__version__ = "0.1.0"
