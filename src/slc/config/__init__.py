# SPDX-License-Identifier: MIT
"""Service configuration."""

from .loader import load_config, get_default_config, validate_config

__all__ = ["load_config", "get_default_config", "validate_config"]
