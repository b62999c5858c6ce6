"""Configuration for the student contacts client."""
from contacts.config.settings import Settings, get_settings, DEPLOYMENT_HOSTS

__all__ = ["Settings", "get_settings", "DEPLOYMENT_HOSTS"]
