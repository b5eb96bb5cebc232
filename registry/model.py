"""Data model for imported module names and resolved dependencies."""

from pathlib import Path
from typing import Iterable, Iterator, List, NamedTuple, Union


class ModuleName(NamedTuple):
    """
    A module name requested by a binary's import metadata.
    
    The case policy is set by the format that produced the name: PE imports
    are matched case-insensitively, ELF imports case-sensitively.
    """
    
    name: str
    case_insensitive: bool = False
    
    def matches(self, other: Union["ModuleName", str]) -> bool:
        """
        Compare against another module name or a candidate file base name.
        
        Only this entry's own case policy is applied.
        """
        other_name = other.name if isinstance(other, ModuleName) else other
        if self.case_insensitive:
            return self.name.upper() == other_name.upper()
        return self.name == other_name
    
    def __str__(self) -> str:
        return self.name


class ModuleRegistry:
    """
    An ordered, deduplicating collection of module names.
    
    Names are kept in discovery order. A name is appended only when no
    existing entry compares equal to it under the new name's case policy.
    """
    
    def __init__(self, names: Iterable[ModuleName] = ()):
        self._names: List[ModuleName] = []
        self.extend(names)
    
    @property
    def names(self) -> List[ModuleName]:
        """Return a copy of the registered names in discovery order."""
        return list(self._names)
    
    def append_if_new(self, name: ModuleName) -> bool:
        """
        Append a module name unless an equal entry is already present.
        
        Returns:
            True if the name was appended.
        """
        for existing in self._names:
            if name.matches(existing):
                return False
        self._names.append(name)
        return True
    
    def extend(self, names: Iterable[ModuleName]) -> int:
        """Append each new name in order; return how many were added."""
        added = 0
        for name in names:
            if self.append_if_new(name):
                added += 1
        return added
    
    def sorted_names(self) -> List[ModuleName]:
        """Return the names sorted by their raw, case-sensitive spelling."""
        return sorted(self._names, key=lambda m: m.name)
    
    def __len__(self) -> int:
        return len(self._names)
    
    def __getitem__(self, index: int) -> ModuleName:
        return self._names[index]
    
    def __iter__(self) -> Iterator[ModuleName]:
        return iter(self._names)
    
    def __contains__(self, name: object) -> bool:
        if not isinstance(name, ModuleName):
            return False
        return any(name.matches(existing) for existing in self._names)


class Resolution:
    """
    Result of transitive dependency resolution.
    
    Dependencies are the matched candidate files, one per matched import, in
    the order they were matched. Unresolved imports matched no candidate.
    """
    
    def __init__(self):
        self._dependencies: List[Path] = []
        self._unresolved: List[ModuleName] = []
    
    @property
    def dependencies(self) -> List[Path]:
        """Return matched dependency paths in match order."""
        return list(self._dependencies)
    
    @property
    def unresolved(self) -> List[ModuleName]:
        """Return imports that matched no candidate, in discovery order."""
        return list(self._unresolved)
    
    def add_dependency(self, path: Path) -> None:
        """Record a matched dependency file. Duplicates are kept."""
        self._dependencies.append(path)
    
    def add_unresolved(self, name: ModuleName) -> None:
        """Record an import that matched no candidate."""
        self._unresolved.append(name)
    
    def sorted_dependencies(self) -> List[str]:
        """Return dependency paths as strings, sorted lexically."""
        return sorted(str(path) for path in self._dependencies)
    
    def has_unresolved(self) -> bool:
        """Check if any import went unmatched."""
        return bool(self._unresolved)
    
    def __len__(self) -> int:
        return len(self._dependencies)
    
    def __iter__(self) -> Iterator[Path]:
        return iter(self._dependencies)
