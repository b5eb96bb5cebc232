#!/usr/bin/env python3
"""
Module Depend CLI

A tool for listing the shared libraries and DLLs that ELF and PE binaries
import, optionally resolving them transitively against directories of files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from scanner.config import OUTPUT_FORMATS, load_config, split_roots
from scanner.discovery import MAX_RECURSION_LEVELS, build_pool
from scanner.errors import ScanError
from scanner.formats import collect_imports
from scanner.resolver import resolve
from exporters import modules_to_text, resolution_to_text, modules_to_json, resolution_to_json


logger = logging.getLogger(__name__)


def non_negative_int(value):
    """Argparse type for depth limits."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer: {value}")
    return number


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="module-depend",
        description="List the modules ELF and PE binaries import, optionally resolving them transitively.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  module-depend app.exe                        # Imported module names, sorted
  module-depend bin/tool --from-dir lib        # Resolved dependency files
  module-depend app.exe --from-dir dlls,plugins -f json
  module-depend app.exe --config depend.yaml   # Defaults from a YAML file
        """,
    )
    
    # Positional arguments
    parser.add_argument(
        "modules",
        nargs="*",
        help="Binaries whose imports are listed",
    )
    
    # Resolution options
    parser.add_argument(
        "--from-dir",
        type=str,
        default=None,
        help="Comma-separated directories to resolve dependencies from",
    )
    
    parser.add_argument(
        "--max-depth",
        type=non_negative_int,
        default=None,
        help=f"Maximum directory recursion depth (default: {MAX_RECURSION_LEVELS})",
    )
    
    # Output options
    parser.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )
    
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file",
    )
    
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debugging information to stderr",
    )
    
    return parser.parse_args(args)


def setup_logging(verbose: bool = False):
    """Set up logging to stderr."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_settings(parsed) -> Dict[str, Any]:
    """
    Merge the configuration file with command line options.
    
    Command line values take precedence over the file.
    """
    settings: Dict[str, Any] = {
        "from_dir": [],
        "max_depth": MAX_RECURSION_LEVELS,
        "format": "text",
    }
    
    if parsed.config:
        settings.update(load_config(Path(parsed.config)))
    
    if parsed.from_dir:
        settings["from_dir"] = split_roots(parsed.from_dir)
    if parsed.max_depth is not None:
        settings["max_depth"] = parsed.max_depth
    if parsed.format:
        settings["format"] = parsed.format
    
    return settings


def run(parsed) -> str:
    """Scan the requested binaries and render the result."""
    settings = load_settings(parsed)
    imports = collect_imports(parsed.modules)
    
    if not settings["from_dir"]:
        if settings["format"] == "json":
            return modules_to_json(imports)
        return modules_to_text(imports)
    
    pool = build_pool(settings["from_dir"], max_depth=settings["max_depth"])
    resolution = resolve(imports, pool)
    if resolution.has_unresolved():
        logger.debug("%d import(s) left unresolved", len(resolution.unresolved))
    
    if settings["format"] == "json":
        return resolution_to_json(resolution)
    return resolution_to_text(resolution)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    setup_logging(parsed.verbose)
    
    try:
        output = run(parsed)
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output, encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error: cannot write output: {e}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(output)
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
