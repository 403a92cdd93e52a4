"""Configuration module for the WorkOS client."""
from .settings import ClientConfig, load_settings

__all__ = ["ClientConfig", "load_settings"]
