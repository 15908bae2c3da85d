from .base_settings import RegistrySettings, get_settings

__all__ = ["RegistrySettings", "get_settings"]
