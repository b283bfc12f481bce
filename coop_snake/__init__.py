"""Cooperative dual snake simulation."""

from .model import advance, initialize, snapshot

__all__ = ['advance', 'initialize', 'snapshot']
