"""Module name registry and resolution results."""

from .model import ModuleName, ModuleRegistry, Resolution

__all__ = ["ModuleName", "ModuleRegistry", "Resolution"]
