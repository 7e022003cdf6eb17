"""Line-based comment detection.

Region markers live inside comments, but finding comments precisely needs a
real syntax tree. This module is a language-agnostic stand-in: a line is
comment text when it starts with a configured comment prefix or lies inside a
block comment. Editors with a parser at hand should pass their own
``(line_number, text)`` pairs to `find_markers` instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .config import RegionConfig, normalize_config
from .models import CommentState, ScanContext

logger = logging.getLogger(__name__)


def _find_block_opener(text: str, config: RegionConfig) -> tuple[int, str, str] | None:
    """Locate the earliest block-comment opener in `text`.

    Returns:
        tuple[int, str, str] | None: Index of the opener, the opener and its
            paired closer, or None when the line opens no block comment.
    """
    earliest = None
    for opener, closer in zip(config.block_comment_openers, config.block_comment_closers):
        index = text.find(opener)
        if index != -1 and (earliest is None or index < earliest[0]):
            earliest = (index, opener, closer)
    return earliest


def _try_open_block(ctx: ScanContext, text: str, line_number: int, config: RegionConfig) -> bool:
    """Enter block-comment state when a line opens a comment it does not close.

    Args:
        ctx: Scanner context to update.
        text: Current line without its line ending.
        line_number: One-based number of the current line.
        config: Configuration listing block-comment tokens.

    Returns:
        bool: True when the context switched to `IN_BLOCK_COMMENT`.

    Examples:
        _try_open_block(ScanContext(), "/* region Setup", 1, RegionConfig())  # True
        _try_open_block(ScanContext(), "/* note */", 1, RegionConfig())  # False
    """
    if ctx.state is not CommentState.NORMAL:
        return False

    found = _find_block_opener(text, config)
    if found is None:
        return False

    index, opener, closer = found
    if closer in text[index + len(opener) :]:
        return False

    ctx.state = CommentState.IN_BLOCK_COMMENT
    ctx.closer = closer
    ctx.open_line = line_number
    return True


def _try_close_block(ctx: ScanContext, text: str) -> bool:
    """Leave block-comment state when the line holds the expected closer.

    Examples:
        ctx = ScanContext(state=CommentState.IN_BLOCK_COMMENT, closer="*/", open_line=1)
        _try_close_block(ctx, " * endregion */")  # True
    """
    if ctx.state is not CommentState.IN_BLOCK_COMMENT or ctx.closer is None:
        return False

    if ctx.closer not in text:
        return False

    ctx.state = CommentState.NORMAL
    ctx.closer = None
    ctx.open_line = 0
    return True


def iter_comment_lines(
    lines: Iterable[str], config: RegionConfig | None = None
) -> Iterator[tuple[int, str]]:
    """Yield the lines of a document that hold comment text.

    Lines starting with a comment prefix are yielded, as is every line from a
    block-comment opener up to and including its closer. Code lines with a
    trailing comment are skipped unless they open a multi-line block comment.

    Args:
        lines: Document lines, with or without line endings.
        config: Configuration listing comment tokens.

    Yields:
        tuple[int, str]: One-based line number and the line without its ending.

    Examples:
        list(iter_comment_lines(["x = 1", "# region Setup"]))  # [(2, "# region Setup")]
    """
    config = normalize_config(config or RegionConfig())
    openers = tuple(config.block_comment_openers)
    ctx = ScanContext()

    for line_number, line in enumerate(lines, start=1):
        text = line.rstrip("\r\n")

        if ctx.state is CommentState.IN_BLOCK_COMMENT:
            _try_close_block(ctx, text)
            yield line_number, text
            continue

        stripped = text.strip()
        if not stripped:
            continue

        starts_block = stripped.startswith(openers)
        if stripped.startswith(config.comment_prefixes) and not starts_block:
            yield line_number, text
            continue

        if _try_open_block(ctx, stripped, line_number, config) or starts_block:
            yield line_number, text

    if ctx.state is CommentState.IN_BLOCK_COMMENT:
        logger.debug("Block comment opened at line %d is never closed", ctx.open_line)
