"""Line-oriented text exporter (one value per line)."""

from typing import Iterable

from registry.model import ModuleRegistry, Resolution


def _lines(values: Iterable[str]) -> str:
    return "".join(f"{value}\n" for value in values)


def modules_to_text(registry: ModuleRegistry) -> str:
    """Render module names sorted by their raw spelling, one per line."""
    return _lines(module.name for module in registry.sorted_names())


def resolution_to_text(resolution: Resolution) -> str:
    """
    Render resolved dependency paths, sorted, one per line.
    
    A file matched by several imports appears once per import.
    """
    return _lines(resolution.sorted_dependencies())
