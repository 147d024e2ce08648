# SPDX-License-Identifier: MIT
"""Persistence backends for per-user classifier state."""

from .base import MemoryStore, StateStore

__all__ = ["MemoryStore", "StateStore"]
