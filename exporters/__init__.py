"""Exporters for converting scan results to output formats."""

from .text_exporter import modules_to_text, resolution_to_text
from .json_exporter import modules_to_json, resolution_to_json

__all__ = [
    "modules_to_text",
    "resolution_to_text",
    "modules_to_json",
    "resolution_to_json",
]
