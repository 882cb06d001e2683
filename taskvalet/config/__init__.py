"""
TaskValet Config - YAML-based runtime configuration

Load runtime settings and custom modes from YAML files.
"""

from .loader import ConfigLoader, ModeConfig, RuntimeSettings

__all__ = [
    "ConfigLoader",
    "ModeConfig",
    "RuntimeSettings",
]
