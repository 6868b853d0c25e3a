"""Configuration management module."""

from .settings import SlotBookSettings, get_settings, reset_settings

__all__ = ["SlotBookSettings", "get_settings", "reset_settings"]
