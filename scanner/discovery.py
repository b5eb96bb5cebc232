"""Candidate pool discovery: flatten root paths into a list of files."""

import logging
import stat
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from .errors import FileAccessError, TooManyLevelsError


logger = logging.getLogger(__name__)

MAX_RECURSION_LEVELS = 1024


def iter_files(root: Path, max_depth: int = MAX_RECURSION_LEVELS) -> Iterator[Path]:
    """
    Iterate over regular files under a root path, depth first.
    
    The root itself is level 0 and the entries of a directory are one level
    deeper than the directory. Directory entries are visited in sorted order.
    
    Args:
        root: A regular file or a directory.
        max_depth: Deepest level that may be visited.
    
    Yields:
        Paths of regular files, following symlinks.
    
    Raises:
        FileAccessError: The root is missing, unreadable, or neither a
            regular file nor a directory. Deeper entries with these problems
            are skipped.
        TooManyLevelsError: An entry lies deeper than max_depth.
    """
    stack = [(root, 0)]
    
    while stack:
        current, depth = stack.pop()
        if depth > max_depth:
            raise TooManyLevelsError(current)
        
        try:
            mode = current.stat().st_mode
        except OSError as e:
            if depth == 0:
                raise FileAccessError(f"Cannot access '{current}': {e.strerror or e}") from e
            logger.debug("Skipping inaccessible entry %s: %s", current, e)
            continue
        
        if stat.S_ISDIR(mode):
            try:
                entries = sorted(current.iterdir())
            except OSError as e:
                if depth == 0:
                    raise FileAccessError(
                        f"Cannot list directory '{current}': {e.strerror or e}"
                    ) from e
                logger.debug("Skipping unreadable directory %s: %s", current, e)
                continue
            # Reversed so entries pop off the stack in sorted order
            stack.extend((entry, depth + 1) for entry in reversed(entries))
        elif stat.S_ISREG(mode):
            yield current
        elif depth == 0:
            raise FileAccessError(f"Not a regular file or directory: '{current}'")


def build_pool(
    roots: Iterable[Union[str, Path]],
    max_depth: int = MAX_RECURSION_LEVELS,
) -> List[Path]:
    """
    Flatten root paths into an ordered list of candidate files.
    
    Empty root strings are skipped. Each root is walked independently with
    its own depth count.
    """
    files: List[Path] = []
    for root in roots:
        if not root:
            continue
        files.extend(iter_files(Path(root), max_depth=max_depth))
    logger.debug("Candidate pool holds %d file(s)", len(files))
    return files
