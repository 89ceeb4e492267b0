"""Bidirectional PMS <-> channel-manager synchronization service."""

__version__ = "1.0.0"
