"""Loading of the optional YAML configuration file."""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .errors import ConfigError


PATH_SEPARATOR = ","
OUTPUT_FORMATS = ("text", "json")
CONFIG_KEYS = {"from_dir", "max_depth", "format"}


def split_roots(value: Union[str, List[str]]) -> List[str]:
    """
    Split a comma-separated root list, dropping empty entries.
    
    Lists are accepted as-is, minus empty entries.
    """
    if isinstance(value, str):
        roots = value.split(PATH_SEPARATOR)
    elif isinstance(value, list) and all(isinstance(item, str) for item in value):
        roots = value
    else:
        raise ConfigError("'from_dir' must be a string or a list of strings")
    return [root for root in roots if root]


def load_config(path: Path) -> Dict[str, Any]:
    """
    Load settings from a YAML file.
    
    Args:
        path: Path to the configuration file.
    
    Returns:
        Dictionary with any of the keys 'from_dir' (list of roots),
        'max_depth' (int) and 'format' (str). Missing keys are omitted.
    
    Raises:
        ConfigError: If the file cannot be read or holds invalid settings.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e
    
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file '{path}': {e}") from e
    
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping")
    
    unknown = set(data) - CONFIG_KEYS
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(sorted(map(str, unknown)))}")
    
    config: Dict[str, Any] = {}
    
    if "from_dir" in data:
        config["from_dir"] = split_roots(data["from_dir"])
    
    if "max_depth" in data:
        max_depth = data["max_depth"]
        # bool is an int subclass
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ConfigError("'max_depth' must be a non-negative integer")
        config["max_depth"] = max_depth
    
    if "format" in data:
        if data["format"] not in OUTPUT_FORMATS:
            raise ConfigError(f"'format' must be one of: {', '.join(OUTPUT_FORMATS)}")
        config["format"] = data["format"]
    
    return config
