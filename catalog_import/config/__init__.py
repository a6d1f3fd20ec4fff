"""
Configuration Package
Process-level settings for catalog import.
"""

from .settings import ImportSettings, get_settings

__all__ = ["ImportSettings", "get_settings"]
