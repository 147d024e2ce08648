# SPDX-License-Identifier: MIT
"""Self-learning classifier exceptions."""

from __future__ import annotations


class SLCError(Exception):
    """Base class for all classifier errors."""


class ConfigError(SLCError):
    """Raised when configuration is missing or invalid."""

    def __init__(self, message: str, config_path: str = None, section: str = None):
        self.config_path = config_path
        self.section = section
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.config_path:
            msg += f" (config: {self.config_path})"
        if self.section:
            msg += f" (section: {self.section})"
        return msg


class ValidationError(SLCError):
    """Raised when caller input is structurally invalid. State is left untouched."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.field:
            msg += f" (field: {self.field})"
        return msg


class StoreError(SLCError):
    """Raised when the state store fails to load, save or delete a record."""

    def __init__(self, message: str, user_id: str = None, operation: str = None):
        self.user_id = user_id
        self.operation = operation
        super().__init__(message)

    def __str__(self):
        msg = super().__str__()
        if self.operation:
            msg += f" (operation: {self.operation})"
        if self.user_id:
            msg += f" (user: {self.user_id})"
        return msg
