"""Per-document region snapshots."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator, Sequence

from .config import RegionConfig, normalize_config, validate_config
from .constants import FOLDEXPR_UNCHANGED
from .fold import fold_directive_for_line
from .models import NO_FOLD, DocumentSnapshot, FoldDirective
from .regions import scan_document

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """Track the current snapshot of every open document.

    Each update rescans the full document and swaps in a new snapshot; existing
    snapshots are never modified, so a reader holding an older snapshot keeps a
    consistent view. The registry does no locking and expects one writer per
    document.

    Examples:
        registry = DocumentRegistry(RegionConfig())
        registry.update("main.lua", source_text)
        registry.foldexpr("main.lua", 12)
        registry.close("main.lua")
    """

    def __init__(self, config: RegionConfig | None = None):
        config = normalize_config(config or RegionConfig())
        validate_config(config)
        self.config = config
        self._snapshots: dict[Hashable, DocumentSnapshot] = {}

    def update(self, doc_id: Hashable, content: str | Sequence[str]) -> DocumentSnapshot:
        """Rescan `content` and replace the snapshot stored for `doc_id`."""
        snapshot = scan_document(content, self.config)
        self._snapshots[doc_id] = snapshot
        logger.debug(
            "Replaced snapshot for %r (%d regions, %d errors)",
            doc_id,
            len(snapshot.regions),
            len(snapshot.errors),
        )
        return snapshot

    def get(self, doc_id: Hashable) -> DocumentSnapshot | None:
        return self._snapshots.get(doc_id)

    def close(self, doc_id: Hashable) -> None:
        """Forget the snapshot of a closed document; unknown ids are ignored."""
        if self._snapshots.pop(doc_id, None) is not None:
            logger.debug("Dropped snapshot for %r", doc_id)

    def fold_directive(self, doc_id: Hashable, line_number: int) -> FoldDirective:
        snapshot = self._snapshots.get(doc_id)
        if snapshot is None:
            return NO_FOLD
        return fold_directive_for_line(line_number, snapshot)

    def foldexpr(self, doc_id: Hashable, line_number: int) -> str:
        """Answer a Vim ``foldexpr`` query for one line.

        Returns ``"="`` (keep the previous level) when folding is disabled or
        the document has not been scanned yet.
        """
        snapshot = self._snapshots.get(doc_id)
        if not self.config.enable_folding or snapshot is None:
            return FOLDEXPR_UNCHANGED
        return fold_directive_for_line(line_number, snapshot).to_foldexpr()

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._snapshots

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._snapshots))

    def __len__(self) -> int:
        return len(self._snapshots)
