"""Text renderings of region snapshots."""

from __future__ import annotations

import json

from .config import RegionConfig, normalize_config, validate_config
from .constants import UNNAMED_REGION
from .fold import fold_directives, initially_folded
from .models import DocumentSnapshot


def render_outline(snapshot: DocumentSnapshot, config: RegionConfig | None = None) -> list[str]:
    """Render the region table as an indented outline.

    Each region becomes one line holding its line span and name, indented by
    ``indent_chars`` once per ancestor. Regions that start closed are tagged
    ``[folded]``.

    Args:
        snapshot: Snapshot to render.
        config: Configuration for indentation and default folding. Defaults to
            a new `RegionConfig` when omitted.

    Returns:
        list[str]: Outline lines, each ending with a newline.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        render_outline(snapshot)
        # ["1-9 Imports\\n", "  2-8 (unnamed) [folded]\\n"]
    """
    config = normalize_config(config or RegionConfig())
    validate_config(config)

    folded = set(initially_folded(snapshot, config))
    outline = []
    for region in snapshot.regions:
        indent = config.indent_chars * (region.level - 1)
        name = region.name or UNNAMED_REGION
        suffix = " [folded]" if region.start_line in folded else ""
        outline.append(f"{indent}{region.start_line}-{region.end_line} {name}{suffix}\n")
    return outline


def render_errors(snapshot: DocumentSnapshot) -> list[str]:
    """Render structural errors as ``line N: message`` lines."""
    return [f"line {error.line}: {error.message}\n" for error in snapshot.errors]


def render_fold_levels(snapshot: DocumentSnapshot, line_count: int) -> list[str]:
    """Render the ``foldexpr`` value of every line, tab-separated from its number."""
    return [
        f"{line}\t{directive.to_foldexpr()}\n"
        for line, directive in enumerate(fold_directives(snapshot, line_count), start=1)
    ]


def render_json(snapshot: DocumentSnapshot) -> str:
    """Serialize a snapshot to JSON with ``regions`` and ``errors`` arrays."""
    payload = {
        "regions": [
            {
                "start_line": region.start_line,
                "end_line": region.end_line,
                "level": region.level,
                "name": region.name,
                "fold": region.fold,
            }
            for region in snapshot.regions
        ],
        "errors": [
            {"line": error.line, "kind": error.kind.name.lower(), "message": error.message}
            for error in snapshot.errors
        ],
    }
    return json.dumps(payload, indent=2) + "\n"
