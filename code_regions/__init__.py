"""
code-regions: Region markers, nesting, and fold levels for source files.

Finds ``region`` / ``endregion`` markers in comments, pairs them into nested
regions, reports unmatched or mismatched markers, and answers per-line fold
queries for expression-based folding engines such as Vim's ``foldexpr``.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    code-regions src/init.lua

Library Usage:
    from code_regions import fold_directive_for_line, scan_document

    snapshot = scan_document(Path("init.lua").read_text())
    for region in snapshot.regions:
        print(region.start_line, region.end_line, region.level, region.name)
    fold_directive_for_line(12, snapshot).to_foldexpr()
"""

from .comments import iter_comment_lines
from .config import ConfigError, RegionConfig, build_config, load_config
from .documents import DocumentRegistry
from .exceptions import LineTooLongError, ScanError, TooManyMarkersError
from .fold import fold_directive_for_line, fold_directives, initially_folded, to_foldexpr
from .models import (
    NO_FOLD,
    DocumentSnapshot,
    FoldDirective,
    FoldKind,
    Marker,
    MarkerKind,
    Region,
    RegionError,
    RegionErrorKind,
)
from .parser import find_markers, parse_marker
from .regions import ScanFileError, build_regions, scan_document, scan_file

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_marker",
    "find_markers",
    "build_regions",
    "fold_directive_for_line",
    "scan_document",
    "scan_file",
    # Folding helpers
    "fold_directives",
    "initially_folded",
    "to_foldexpr",
    "DocumentRegistry",
    "iter_comment_lines",
    # Data models
    "DocumentSnapshot",
    "FoldDirective",
    "FoldKind",
    "Marker",
    "MarkerKind",
    "NO_FOLD",
    "Region",
    "RegionError",
    "RegionErrorKind",
    # Configuration
    "RegionConfig",
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "LineTooLongError",
    "ScanError",
    "ScanFileError",
    "TooManyMarkersError",
    # Version
    "__version__",
]
