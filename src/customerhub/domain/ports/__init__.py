"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import CustomerStore

__all__ = ["CustomerStore"]
