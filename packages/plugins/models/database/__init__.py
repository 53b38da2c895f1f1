from .plugin import PluginEntity


__all__ = ["PluginEntity"]
