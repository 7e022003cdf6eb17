"""Data models for code-regions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class MarkerKind(Enum):
    """Boundary kind of a region marker."""

    START = auto()
    END = auto()


@dataclass(frozen=True)
class Marker:
    """A region marker recognized on a single comment line.

    Attributes:
        line: One-based line number of the marker.
        kind: Whether the marker opens or closes a region.
        name: Optional region name following the keyword.
        fold_default: Whether the region should start out folded.
    """

    line: int
    kind: MarkerKind
    name: str | None = None
    fold_default: bool = False


@dataclass
class OpenFrame:
    """A start marker waiting for its matching end marker."""

    line: int
    name: str | None = None
    fold_default: bool = False


@dataclass(frozen=True)
class Region:
    """A closed, correctly nested region.

    Attributes:
        start_line: One-based line of the start marker.
        end_line: One-based line of the end marker.
        level: One-based nesting depth (1 is outermost).
        name: Name taken from the start marker, if any.
        fold: Fold-default flag taken from the start marker.
    """

    start_line: int
    end_line: int
    level: int
    name: str | None = None
    fold: bool = False

    def contains(self, other: Region) -> bool:
        """Return True when `other` lies within this region, bounds included."""
        return self.start_line <= other.start_line and other.end_line <= self.end_line

    def is_disjoint(self, other: Region) -> bool:
        """Return True when the two regions share no line."""
        return self.end_line < other.start_line or other.end_line < self.start_line


class RegionErrorKind(Enum):
    """Structural problems detected while pairing markers.

    Attributes:
        UNMATCHED_END: End marker with no open start marker.
        MISMATCHED_NAME: Paired markers whose names both exist and differ.
        UNCLOSED_START: Start marker never closed before end of document.
    """

    UNMATCHED_END = auto()
    MISMATCHED_NAME = auto()
    UNCLOSED_START = auto()


@dataclass(frozen=True)
class RegionError:
    """Non-fatal diagnostic attached to a document snapshot."""

    line: int
    kind: RegionErrorKind
    message: str


@dataclass(frozen=True)
class DocumentSnapshot:
    """Immutable result of scanning one document.

    Attributes:
        regions: Regions ordered by start line, outer regions first on ties.
        errors: Diagnostics in source order, unclosed starts last.
    """

    regions: tuple[Region, ...] = ()
    errors: tuple[RegionError, ...] = ()

    @property
    def ok(self) -> bool:
        """True when the scan found no structural errors."""
        return not self.errors


class FoldKind(Enum):
    """Fold directive categories understood by expression-based folding.

    Attributes:
        START: The line opens a fold at the given level.
        CONTINUE: The line sits inside a fold at the given level.
        NONE: The line is outside every fold.
    """

    START = auto()
    CONTINUE = auto()
    NONE = auto()


@dataclass(frozen=True)
class FoldDirective:
    """Fold information for one line."""

    kind: FoldKind
    level: int = 0

    def to_foldexpr(self) -> str:
        """Encode the directive as a Vim ``foldexpr`` result.

        Examples:
            FoldDirective(FoldKind.START, 2).to_foldexpr()  # ">2"
            FoldDirective(FoldKind.CONTINUE, 1).to_foldexpr()  # "1"
            NO_FOLD.to_foldexpr()  # "0"
        """
        if self.kind is FoldKind.START:
            return f">{self.level}"
        if self.kind is FoldKind.CONTINUE:
            return str(self.level)
        return "0"


NO_FOLD = FoldDirective(FoldKind.NONE)


class CommentState(Enum):
    """States used while scanning source lines for comment text.

    Attributes:
        NORMAL: Outside any block comment.
        IN_BLOCK_COMMENT: Inside a block comment spanning several lines.
    """

    NORMAL = auto()
    IN_BLOCK_COMMENT = auto()


@dataclass
class ScanContext:
    """Encapsulate comment-scanner state while walking source lines.

    Attributes:
        state: Current scanner state.
        closer: Closing token expected for the active block comment, if any.
        open_line: One-based line where the active block comment started.
    """

    state: CommentState = CommentState.NORMAL
    closer: str | None = None
    open_line: int = 0
