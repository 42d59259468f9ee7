"""Built-in plugins registered by every PluginManager."""

from depcontainer.plugins.builtins.namespace import NamespaceSuffixPlugin

__all__ = ["NamespaceSuffixPlugin"]
