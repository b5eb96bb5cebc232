"""Transitive resolution of imported module names to candidate files."""

import logging
from pathlib import Path
from typing import Optional, Sequence

from registry.model import ModuleName, ModuleRegistry, Resolution
from .formats import extract_imports


logger = logging.getLogger(__name__)


def find_candidate(pool: Sequence[Path], module: ModuleName) -> Optional[Path]:
    """
    Find the first candidate whose base name matches a module name.
    
    The module name's own case policy governs the comparison.
    """
    for path in pool:
        if module.matches(path.name):
            return path
    return None


def resolve(imports: ModuleRegistry, pool: Sequence[Path]) -> Resolution:
    """
    Resolve imports against a candidate pool until no new imports appear.
    
    The registry is used as a worklist: each matched file is parsed and its
    own imports are appended to the registry, so the loop bound grows as
    resolution proceeds. Imports with no matching candidate are recorded as
    unresolved and otherwise ignored.
    
    Args:
        imports: Imports to resolve. Extended in place.
        pool: Candidate files, searched in order.
    
    Returns:
        Resolution holding one dependency path per matched import.
    
    Raises:
        ScanError: A matched file could not be parsed. No partial result.
    """
    resolution = Resolution()
    index = 0
    
    while index < len(imports):
        module = imports[index]
        match = find_candidate(pool, module)
        if match is None:
            logger.debug("No candidate for %s", module)
            resolution.add_unresolved(module)
        else:
            added = imports.extend(extract_imports(match))
            logger.debug("Resolved %s -> %s (%d new import(s))", module, match, added)
            resolution.add_dependency(match)
        index += 1
    
    return resolution
