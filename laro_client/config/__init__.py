"""Configuration module: client settings."""

from laro_client.config.settings import ClientSettings

__all__ = ["ClientSettings"]
