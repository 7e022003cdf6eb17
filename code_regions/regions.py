"""Region tree construction and document scanning."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from .comments import iter_comment_lines
from .config import ConfigError, RegionConfig, normalize_config, validate_config
from .exceptions import LineTooLongError, ScanError, TooManyMarkersError
from .filesystem import safe_read
from .models import (
    DocumentSnapshot,
    Marker,
    MarkerKind,
    OpenFrame,
    Region,
    RegionError,
    RegionErrorKind,
)
from .parser import find_markers

logger = logging.getLogger(__name__)


def build_regions(markers: Iterable[Marker]) -> DocumentSnapshot:
    """Pair start and end markers into nested regions.

    Markers must arrive sorted by line number; they are not re-sorted. Each end
    marker closes the most recently opened start marker. Problems are recorded
    as errors and never stop the pass: an end marker with nothing open is
    skipped, a name mismatch still closes the region, and start markers left
    open at the end are reported without producing a region.

    Args:
        markers: Markers in ascending line order.

    Returns:
        DocumentSnapshot: Regions sorted by start line (outer first when two
            regions share a start line) and errors in source order, followed by
            unclosed starts in the order they were opened.

    Examples:
        build_regions([
            Marker(1, MarkerKind.START),
            Marker(2, MarkerKind.START),
            Marker(8, MarkerKind.END),
            Marker(9, MarkerKind.END),
        ])
        # regions: (1, 9, level 1), (2, 8, level 2)
    """
    regions: list[Region] = []
    errors: list[RegionError] = []
    stack: list[OpenFrame] = []

    for marker in markers:
        if marker.kind is MarkerKind.START:
            stack.append(OpenFrame(marker.line, marker.name, marker.fold_default))
            continue

        if not stack:
            errors.append(
                RegionError(
                    marker.line, RegionErrorKind.UNMATCHED_END, "Unmatched end region marker"
                )
            )
            continue

        frame = stack.pop()
        if frame.name is not None and marker.name is not None and frame.name != marker.name:
            errors.append(
                RegionError(
                    marker.line,
                    RegionErrorKind.MISMATCHED_NAME,
                    f"Mismatched region names: expected '{frame.name}', got '{marker.name}'",
                )
            )

        # Depth the frame occupied while it was open
        level = len(stack) + 1
        regions.append(Region(frame.line, marker.line, level, frame.name, frame.fold_default))

    for frame in stack:
        errors.append(
            RegionError(frame.line, RegionErrorKind.UNCLOSED_START, "Unclosed region marker")
        )

    regions.sort(key=lambda region: (region.start_line, -region.end_line))
    return DocumentSnapshot(regions=tuple(regions), errors=tuple(errors))


def _line_length(line: str) -> int:
    length = len(line)
    if line.endswith("\n"):
        length -= 1
        if length > 0 and line[length - 1] == "\r":
            length -= 1
    return length


def scan_document(
    content: str | Sequence[str],
    config: RegionConfig | None = None,
    max_line_length: int | None = None,
) -> DocumentSnapshot:
    """Scan a whole document and build its region snapshot.

    Comment lines are found with `iter_comment_lines`, parsed into markers and
    paired by `build_regions`. The whole document is rescanned on every call.

    Args:
        content: Document text, or its lines.
        config: Configuration controlling marker syntax and limits. Defaults to
            a new `RegionConfig` when omitted.
        max_line_length: Optional override for the maximum allowed line length
            (excluding line endings).

    Returns:
        DocumentSnapshot: Regions and structural errors for the document.

    Raises:
        ConfigError: If the configuration fails validation.
        LineTooLongError: If a line exceeds the maximum length.
        TooManyMarkersError: If the document has more markers than allowed.

    Examples:
        scan_document("# region A\\nx = 1\\n# endregion\\n")
    """
    config = normalize_config(config or RegionConfig())
    validate_config(config)
    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )

    lines = content.splitlines(keepends=True) if isinstance(content, str) else list(content)
    for line_number, line in enumerate(lines, start=1):
        if _line_length(line) > effective_max_line_length:
            raise LineTooLongError(line_number, effective_max_line_length)

    markers = find_markers(iter_comment_lines(lines, config), config)
    if len(markers) > config.max_markers:
        raise TooManyMarkersError(config.max_markers)

    snapshot = build_regions(markers)
    logger.debug(
        "Scanned %d lines: %d markers, %d regions, %d errors",
        len(lines),
        len(markers),
        len(snapshot.regions),
        len(snapshot.errors),
    )
    return snapshot


class ScanFileError(Exception):
    """Raised when scanning a source file fails."""


def scan_file(
    filepath: Path,
    config: RegionConfig | None = None,
    max_line_length: int | None = None,
) -> tuple[list[str], DocumentSnapshot]:
    """Read a source file and build its region snapshot.

    Args:
        filepath: Path to the file to scan.
        config: Configuration controlling parsing behavior; defaults to a new
            `RegionConfig` when omitted.
        max_line_length: Optional override for the maximum allowed line length
            (excluding line endings).

    Returns:
        tuple[list[str], DocumentSnapshot]: File content as lines and the
            snapshot built from it.

    Raises:
        ScanFileError: If configuration is invalid, scanning fails because of
            limits, or the file cannot be read or decoded.

    Examples:
        lines, snapshot = scan_file(Path("src/app.ts"), config)
    """
    config = config or RegionConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ScanFileError(str(error)) from error

    effective_max_line_length = (
        config.max_line_length if max_line_length is None else max_line_length
    )
    if effective_max_line_length <= 0:
        raise ScanFileError("`max_line_length` override must be a positive integer")

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ScanFileError(error_message) from error
    except IOError as error:
        raise ScanFileError(str(error)) from error

    lines = content.splitlines(keepends=True)
    try:
        snapshot = scan_document(lines, config, effective_max_line_length)
    except LineTooLongError as error:
        error_message = (
            f"{filepath} contains a line at line {error.line_number} "
            f"exceeding the maximum allowed length of {error.max_line_length} characters."
        )
        raise ScanFileError(error_message) from error
    except TooManyMarkersError as error:
        error_message = f"{filepath} contains too many region markers (limit: {error.limit})."
        raise ScanFileError(error_message) from error
    except ScanError as error:
        raise ScanFileError(f"{filepath}: {error}") from error

    return lines, snapshot
