"""Configuration package for the Pushshift bridge."""

from .settings import BridgeConfig, Settings, get_settings

__all__ = ["BridgeConfig", "Settings", "get_settings"]
