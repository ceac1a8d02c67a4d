"""Application-wide settings."""

from kmeans_topics.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
