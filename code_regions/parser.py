"""Region marker parsing utilities."""

from __future__ import annotations

from collections.abc import Iterable

from .config import RegionConfig, normalize_config
from .models import Marker, MarkerKind

_DEFAULT_CONFIG = normalize_config(RegionConfig())


def strip_comment_syntax(text: str, config: RegionConfig) -> str:
    """Remove a leading comment token and a trailing block-comment closer.

    Prefixes are tried in configured order and the first match wins. The
    closer is only stripped when a prefix matched, so plain text passes
    through untouched.

    Args:
        text: Comment line with surrounding whitespace already trimmed.
        config: Configuration listing comment prefixes and closers.

    Returns:
        str: The comment body, trimmed.

    Examples:
        strip_comment_syntax("// region Setup", RegionConfig())  # "region Setup"
        strip_comment_syntax("/* endregion */", RegionConfig())  # "endregion"
    """
    for prefix in config.comment_prefixes:
        if not text.startswith(prefix):
            continue
        content = text[len(prefix) :].strip()
        for closer in config.block_comment_closers:
            if content.endswith(closer):
                content = content[: -len(closer)].strip()
                break
        return content
    return text


def _starts_with_keyword(content: str, keyword: str, case_sensitive: bool) -> bool:
    head = content[: len(keyword)]
    if not case_sensitive:
        head = head.lower()
    return head == keyword


def _is_boundary(text: str) -> bool:
    """Return True when `text` is empty or begins with whitespace."""
    return not text or text[0].isspace()


def _match_start(
    content: str, config: RegionConfig, trailing_fold: bool, line_number: int
) -> Marker | None:
    sentinel = config.fold_sentinel
    for keyword in config.start_keywords:
        if not _starts_with_keyword(content, keyword, config.case_sensitive):
            continue

        remainder = content[len(keyword) :]
        after_keyword = remainder[len(sentinel) :] if remainder.startswith(sentinel) else remainder
        if not _is_boundary(after_keyword):
            # e.g. "regionfoo": keyword is only a prefix of a longer word
            continue

        fold_default = trailing_fold
        body = remainder.strip()
        if body.startswith(sentinel):
            fold_default = True
            body = body[len(sentinel) :].strip()
        return Marker(
            line=line_number,
            kind=MarkerKind.START,
            name=body or None,
            fold_default=fold_default,
        )
    return None


def _match_end(
    content: str, config: RegionConfig, trailing_fold: bool, line_number: int
) -> Marker | None:
    for keyword in config.end_keywords:
        if not _starts_with_keyword(content, keyword, config.case_sensitive):
            continue

        remainder = content[len(keyword) :]
        if not _is_boundary(remainder):
            continue
        return Marker(
            line=line_number,
            kind=MarkerKind.END,
            name=remainder.strip() or None,
            fold_default=trailing_fold,
        )
    return None


def parse_marker(
    line_text: str, config: RegionConfig | None = None, line_number: int = 0
) -> Marker | None:
    """Parse one line of comment text into a region marker.

    Start keywords are tried before end keywords, each in configured order. A
    keyword only counts when it is followed by end of text or whitespace (for
    start keywords, optionally after the fold sentinel), so ``regionfoo`` is
    not a marker. The fold sentinel marks the region as folded by default when
    it directly follows the start keyword or ends the line. Only the sentinel
    attached to the keyword is removed from the name; a trailing one stays.

    Args:
        line_text: Raw text of a line known to be comment text.
        config: Normalized configuration (see `normalize_config`). Defaults to
            the normalized `RegionConfig` defaults.
        line_number: One-based line number recorded on the marker.

    Returns:
        Marker | None: The recognized marker, or None when the line is not a
            region marker.

    Examples:
        parse_marker("# region Setup", line_number=3)
        # Marker(line=3, kind=MarkerKind.START, name="Setup", fold_default=False)
        parse_marker("// region- Helpers")  # folded by default
        parse_marker("-- endregion")  # Marker(kind=MarkerKind.END, name=None)
        parse_marker("# regionfoo")  # None
    """
    config = config or _DEFAULT_CONFIG

    text = line_text.strip()
    if not text:
        return None

    sentinel = config.fold_sentinel
    content = strip_comment_syntax(text, config)
    trailing_fold = text.endswith(sentinel) or content.endswith(sentinel)

    start = _match_start(content, config, trailing_fold, line_number)
    if start is not None:
        return start
    return _match_end(content, config, trailing_fold, line_number)


def find_markers(
    comment_lines: Iterable[tuple[int, str]], config: RegionConfig | None = None
) -> list[Marker]:
    """Parse every supplied comment line and collect region markers.

    Args:
        comment_lines: ``(line_number, text)`` pairs for lines identified as
            comment text, one per physical line.
        config: Configuration controlling marker syntax. Normalized here once.

    Returns:
        list[Marker]: Markers stably sorted by ascending line number.

    Examples:
        find_markers([(1, "# region A"), (4, "# endregion")])
    """
    config = normalize_config(config or RegionConfig())
    markers = []
    for line_number, text in comment_lines:
        marker = parse_marker(text, config, line_number)
        if marker is not None:
            markers.append(marker)

    markers.sort(key=lambda marker: marker.line)
    return markers
