"""JSON exporter for scan results (machine-friendly format)."""

import json
from typing import Any, Dict, List

from registry.model import ModuleRegistry, Resolution


def modules_to_json(registry: ModuleRegistry, indent: int = 2) -> str:
    """
    Convert imported module names to JSON.
    
    Args:
        registry: The deduplicated module names.
        indent: JSON indentation level.
    
    Returns:
        JSON object with a "modules" list sorted by name.
    """
    modules: List[Dict[str, Any]] = []
    for module in registry.sorted_names():
        modules.append({
            "name": module.name,
            "case_insensitive": module.case_insensitive,
        })
    
    return json.dumps({"modules": modules}, indent=indent) + "\n"


def resolution_to_json(resolution: Resolution, indent: int = 2) -> str:
    """
    Convert a resolution to JSON.
    
    Args:
        resolution: The result of transitive resolution.
        indent: JSON indentation level.
    
    Returns:
        JSON object with sorted "dependencies" paths and the sorted names
        of "unresolved" imports.
    """
    data: Dict[str, Any] = {
        "dependencies": resolution.sorted_dependencies(),
        "unresolved": sorted(module.name for module in resolution.unresolved),
    }
    
    return json.dumps(data, indent=indent) + "\n"
