"""Tests for exporters."""

import json
import pytest
from pathlib import Path

from registry.model import ModuleName, ModuleRegistry, Resolution
from exporters.text_exporter import modules_to_text, resolution_to_text
from exporters.json_exporter import modules_to_json, resolution_to_json


@pytest.fixture
def registry():
    return ModuleRegistry([
        ModuleName("USER32.dll", True),
        ModuleName("libc.so.6", False),
        ModuleName("KERNEL32.dll", True),
    ])


@pytest.fixture
def resolution():
    resolution = Resolution()
    resolution.add_dependency(Path("pool/user32.dll"))
    resolution.add_dependency(Path("pool/mylib.dll"))
    resolution.add_unresolved(ModuleName("KERNEL32.DLL", True))
    return resolution


class TestTextExporter:
    """Tests for the line-oriented exporter."""
    
    def test_modules_sorted(self, registry):
        """Names are printed one per line, sorted case-sensitively."""
        assert modules_to_text(registry) == "KERNEL32.dll\nUSER32.dll\nlibc.so.6\n"
    
    def test_empty(self):
        """Nothing to report gives empty output."""
        assert modules_to_text(ModuleRegistry()) == ""
        assert resolution_to_text(Resolution()) == ""
    
    def test_resolution_prints_paths(self, resolution):
        """Resolved paths are printed, not module names."""
        output = resolution_to_text(resolution)
        
        assert output.splitlines() == [
            str(Path("pool/mylib.dll")),
            str(Path("pool/user32.dll")),
        ]
        assert "KERNEL32" not in output


class TestJsonExporter:
    """Tests for JSON exporter."""
    
    def test_modules(self, registry):
        """Test module list export."""
        data = json.loads(modules_to_json(registry))
        
        assert data["modules"][0] == {"name": "KERNEL32.dll", "case_insensitive": True}
        assert [m["name"] for m in data["modules"]] == ["KERNEL32.dll", "USER32.dll", "libc.so.6"]
        assert data["modules"][2]["case_insensitive"] is False
    
    def test_resolution(self, resolution):
        """Test resolution export with unresolved imports."""
        data = json.loads(resolution_to_json(resolution))
        
        assert data["dependencies"] == [
            str(Path("pool/mylib.dll")),
            str(Path("pool/user32.dll")),
        ]
        assert data["unresolved"] == ["KERNEL32.DLL"]
