from __future__ import annotations

import pytest

from code_regions.config import ConfigError, RegionConfig
from code_regions.documents import DocumentRegistry
from code_regions.models import NO_FOLD, FoldDirective, FoldKind, Region

SOURCE = "-- region A\nlocal x = 1\n-- endregion\n"


def test_update_stores_snapshot():
    registry = DocumentRegistry()

    snapshot = registry.update("main.lua", SOURCE)

    assert registry.get("main.lua") is snapshot
    assert snapshot.regions == (Region(1, 3, 1, "A", False),)
    assert "main.lua" in registry
    assert len(registry) == 1


def test_update_replaces_snapshot_without_mutating_previous():
    registry = DocumentRegistry()
    first = registry.update(1, SOURCE)

    second = registry.update(1, "-- region B\n-- endregion\n")

    assert registry.get(1) is second
    assert first.regions == (Region(1, 3, 1, "A", False),)
    assert second.regions == (Region(1, 2, 1, "B", False),)


def test_close_removes_entry():
    registry = DocumentRegistry()
    registry.update("a", SOURCE)
    registry.update("b", SOURCE)

    registry.close("a")
    registry.close("missing")

    assert registry.get("a") is None
    assert list(registry) == ["b"]


def test_foldexpr_for_known_document():
    registry = DocumentRegistry()
    registry.update("doc", SOURCE)

    assert [registry.foldexpr("doc", line) for line in range(1, 5)] == [">1", "1", "1", "0"]


def test_foldexpr_unchanged_for_unknown_document():
    assert DocumentRegistry().foldexpr("unknown", 1) == "="


def test_foldexpr_unchanged_when_folding_disabled():
    registry = DocumentRegistry(RegionConfig(enable_folding=False))
    registry.update("doc", SOURCE)

    assert registry.foldexpr("doc", 1) == "="


def test_fold_directive_lookup():
    registry = DocumentRegistry()
    registry.update("doc", SOURCE)

    assert registry.fold_directive("doc", 1) == FoldDirective(FoldKind.START, 1)
    assert registry.fold_directive("other", 1) is NO_FOLD


def test_registry_uses_configured_keywords():
    registry = DocumentRegistry(RegionConfig(start_keywords=("BEGIN",), end_keywords=("END",)))

    snapshot = registry.update("doc", "# begin\n# end\n")

    assert snapshot.regions == (Region(1, 2, 1),)


def test_registry_rejects_invalid_config():
    with pytest.raises(ConfigError):
        DocumentRegistry(RegionConfig(fold_sentinel=""))
