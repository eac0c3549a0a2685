"""Configuration for the maxcalorie CLI."""

from maxcalorie.config.settings import Settings, get_settings, reload_settings

__all__ = ["Settings", "get_settings", "reload_settings"]
