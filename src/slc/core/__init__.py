# SPDX-License-Identifier: MIT
"""Shared entity shapes and errors."""

from .exceptions import SLCError, ConfigError, ValidationError, StoreError
from .models import Area, Class, ClassifyResult, FeedbackVariant, Snapshot, UserRecord

__all__ = [
    "SLCError",
    "ConfigError",
    "ValidationError",
    "StoreError",
    "Area",
    "Class",
    "ClassifyResult",
    "FeedbackVariant",
    "Snapshot",
    "UserRecord",
]
