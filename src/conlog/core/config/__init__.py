"""
Settings loaded from the environment.
"""

from conlog.core.config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
