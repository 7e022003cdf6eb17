"""Fold directives for expression-based folding engines."""

from __future__ import annotations

from .config import RegionConfig
from .models import NO_FOLD, DocumentSnapshot, FoldDirective, FoldKind


def fold_directive_for_line(line_number: int, snapshot: DocumentSnapshot) -> FoldDirective:
    """Compute the fold directive for one line.

    A line equal to a region's start line opens a fold at the highest level
    starting there. Otherwise the line continues a fold when some region
    satisfies ``start_line < line_number <= end_line``, at the highest such
    level, so the end marker line stays inside its own fold. Every other line
    is outside all folds.

    Scans the whole region list on each call; querying every line of a document
    costs O(lines x regions).

    Args:
        line_number: One-based line to classify.
        snapshot: Snapshot whose regions are consulted. Never modified.

    Returns:
        FoldDirective: Start, continue, or `NO_FOLD`.

    Examples:
        snapshot = DocumentSnapshot(regions=(Region(2, 8, 1),))
        fold_directive_for_line(2, snapshot)  # FoldDirective(FoldKind.START, 1)
        fold_directive_for_line(8, snapshot)  # FoldDirective(FoldKind.CONTINUE, 1)
        fold_directive_for_line(10, snapshot)  # NO_FOLD
    """
    start_level = 0
    containing_level = 0

    for region in snapshot.regions:
        if line_number == region.start_line:
            start_level = max(start_level, region.level)
        elif region.start_line < line_number <= region.end_line:
            containing_level = max(containing_level, region.level)

    if start_level:
        return FoldDirective(FoldKind.START, start_level)
    if containing_level:
        return FoldDirective(FoldKind.CONTINUE, containing_level)
    return NO_FOLD


def to_foldexpr(directive: FoldDirective) -> str:
    """Encode a directive as ``">N"``, ``"N"``, or ``"0"`` for Vim's foldexpr."""
    return directive.to_foldexpr()


def fold_directives(snapshot: DocumentSnapshot, line_count: int) -> list[FoldDirective]:
    """Evaluate `fold_directive_for_line` for lines 1 through `line_count`."""
    return [fold_directive_for_line(line, snapshot) for line in range(1, line_count + 1)]


def initially_folded(snapshot: DocumentSnapshot, config: RegionConfig | None = None) -> list[int]:
    """Return start lines of the regions that should begin closed.

    A region starts closed when its start marker carried the fold sentinel or
    when `fold_by_default` is enabled.

    Examples:
        initially_folded(snapshot, RegionConfig(fold_by_default=True))
    """
    config = config or RegionConfig()
    return [
        region.start_line
        for region in snapshot.regions
        if region.fold or config.fold_by_default
    ]
