"""
Configuration subpackage.

Public API:
- Settings
- load_settings
- default_settings
"""

from .settings import Settings, default_settings, load_settings

__all__ = [
    "Settings",
    "default_settings",
    "load_settings",
]
