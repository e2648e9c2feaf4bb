"""Configuration module for the DMC client."""
from .settings import DmcConfig, load_settings

__all__ = ["DmcConfig", "load_settings"]
