"""Check handlers."""

from .check import NodeCheckHandler

__all__ = ['NodeCheckHandler']
