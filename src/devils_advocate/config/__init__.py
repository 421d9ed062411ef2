"""Configuration module for the Devil's Advocate agent."""

from devils_advocate.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
