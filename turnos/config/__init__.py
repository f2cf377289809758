"""
Configuration Module

Application configuration settings and utilities.
"""

from turnos.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
