from __future__ import annotations

import os

import pytest
from code_regions.models import MarkerKind
from code_regions.parser import parse_marker
from code_regions.regions import scan_document

atheris = pytest.importorskip("atheris")


def test_parse_marker_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    parsed = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        marker = parse_marker(text)
        if marker is not None:
            assert marker.kind in (MarkerKind.START, MarkerKind.END)
        parsed += 1

    assert parsed  # ensure we exercised the loop


def test_scan_document_with_fuzzed_lines():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        keyword = provider.PickValueInList(["region", "endregion", "#region", "note"])
        prefix = provider.PickValueInList(["# ", "// ", "-- ", "/* ", ""])
        name = provider.ConsumeUnicodeNoSurrogates(16).replace("\n", " ")
        lines.append(f"{prefix}{keyword} {name}\n")

    snapshot = scan_document(lines)

    for region in snapshot.regions:
        assert 1 <= region.start_line < region.end_line <= len(lines)
        assert region.level >= 1
