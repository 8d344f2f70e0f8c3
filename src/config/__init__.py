"""
Configuration module for the compatibility scoring service.

Usage:
    from config import get_settings

    settings = get_settings()
    supabase_url = settings.supabase_url
    discovery_url = settings.discovery_endpoint
"""

from config.settings import Settings, get_settings, get_settings_for_testing

__all__ = ["Settings", "get_settings", "get_settings_for_testing"]
