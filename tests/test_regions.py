from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from code_regions.config import RegionConfig
from code_regions.exceptions import LineTooLongError, TooManyMarkersError
from code_regions.models import Marker, MarkerKind, Region, RegionErrorKind
from code_regions.regions import ScanFileError, build_regions, scan_document, scan_file


def _start(line: int, name: str | None = None, fold: bool = False) -> Marker:
    return Marker(line=line, kind=MarkerKind.START, name=name, fold_default=fold)


def _end(line: int, name: str | None = None) -> Marker:
    return Marker(line=line, kind=MarkerKind.END, name=name)


def _write_source(tmp_path: Path, content: str, filename: str = "sample.lua") -> Path:
    target = tmp_path / filename
    target.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return target


def test_balanced_markers_produce_regions_without_errors():
    snapshot = build_regions([_start(1, "A"), _end(4, "A"), _start(6, "B"), _end(9, "B")])

    assert snapshot.errors == ()
    assert snapshot.regions == (
        Region(1, 4, 1, "A", False),
        Region(6, 9, 1, "B", False),
    )


def test_nested_regions_are_sorted_outer_first():
    snapshot = build_regions([_start(1), _start(2), _end(8), _end(9)])

    assert snapshot.errors == ()
    assert snapshot.regions == (Region(1, 9, 1), Region(2, 8, 2))


def test_deep_nesting_levels_match_depth():
    markers = [_start(1), _start(2), _start(3), _end(4), _end(5), _start(6), _end(7), _end(8)]

    snapshot = build_regions(markers)

    assert [(r.start_line, r.end_line, r.level) for r in snapshot.regions] == [
        (1, 8, 1),
        (2, 5, 2),
        (3, 4, 3),
        (6, 7, 2),
    ]


def test_unmatched_end_yields_error_and_no_region():
    snapshot = build_regions([_end(5)])

    assert snapshot.regions == ()
    assert len(snapshot.errors) == 1
    error = snapshot.errors[0]
    assert error.line == 5
    assert error.kind is RegionErrorKind.UNMATCHED_END
    assert error.message == "Unmatched end region marker"


def test_unclosed_start_yields_error_and_no_region():
    snapshot = build_regions([_start(3)])

    assert snapshot.regions == ()
    assert [(e.line, e.kind) for e in snapshot.errors] == [(3, RegionErrorKind.UNCLOSED_START)]


def test_name_mismatch_still_closes_region():
    snapshot = build_regions([_start(1, "A"), _end(10, "B")])

    assert snapshot.regions == (Region(1, 10, 1, "A", False),)
    assert len(snapshot.errors) == 1
    error = snapshot.errors[0]
    assert error.line == 10
    assert error.kind is RegionErrorKind.MISMATCHED_NAME
    assert error.message == "Mismatched region names: expected 'A', got 'B'"


def test_missing_name_on_either_side_is_not_a_mismatch():
    snapshot = build_regions([_start(1, "A"), _end(3), _start(4), _end(6, "B")])

    assert snapshot.errors == ()
    assert [r.name for r in snapshot.regions] == ["A", None]


def test_region_takes_fold_flag_from_start_marker():
    snapshot = build_regions([_start(1, fold=True), _end(2)])

    assert snapshot.regions[0].fold is True


def test_error_order_puts_unclosed_starts_last():
    markers = [_start(1, "outer"), _end(2, "x"), _end(3), _start(4), _start(5), _end(6)]

    snapshot = build_regions(markers)

    assert [(e.line, e.kind) for e in snapshot.errors] == [
        (2, RegionErrorKind.MISMATCHED_NAME),
        (3, RegionErrorKind.UNMATCHED_END),
        (4, RegionErrorKind.UNCLOSED_START),
    ]
    assert snapshot.regions == (Region(1, 2, 1, "outer"), Region(5, 6, 2))


def test_unclosed_errors_follow_push_order():
    snapshot = build_regions([_start(1), _start(2), _start(3)])

    assert [e.line for e in snapshot.errors] == [1, 2, 3]


def test_build_regions_does_not_resort_markers():
    # Out-of-order input is paired as given
    snapshot = build_regions([_end(1), _start(5), _end(9)])

    assert [e.kind for e in snapshot.errors] == [RegionErrorKind.UNMATCHED_END]
    assert snapshot.regions == (Region(5, 9, 1),)


def test_scan_document_finds_regions_in_comments():
    content = textwrap.dedent(
        """
        -- region Setup
        local x = 1
        -- region- Helpers
        local function f() end
        -- endregion Helpers
        -- endregion Setup
        """
    ).lstrip()

    snapshot = scan_document(content)

    assert snapshot.errors == ()
    assert snapshot.regions == (
        Region(1, 6, 1, "Setup", False),
        Region(3, 5, 2, "Helpers", True),
    )


def test_scan_document_reads_block_comment_lines():
    content = "\n".join(
        [
            "/*",
            " * region Types",
            " */",
            "int x;",
            "/* endregion */",
        ]
    )

    snapshot = scan_document(content)

    assert snapshot.regions == (Region(2, 5, 1, "Types", False),)


def test_scan_document_accepts_line_sequences():
    snapshot = scan_document(["# region\n", "x = 1\n", "# endregion\n"])

    assert snapshot.regions == (Region(1, 3, 1),)


def test_scan_document_ignores_markers_outside_comments():
    snapshot = scan_document('label = "region Setup"\nendregion = 1\n')

    assert snapshot.regions == ()
    assert snapshot.errors == ()


def test_scan_document_reports_structural_errors():
    snapshot = scan_document("# endregion\n# region A\n")

    assert [(e.line, e.kind) for e in snapshot.errors] == [
        (1, RegionErrorKind.UNMATCHED_END),
        (2, RegionErrorKind.UNCLOSED_START),
    ]


def test_scan_document_enforces_line_length():
    with pytest.raises(LineTooLongError) as excinfo:
        scan_document("# region\n" + "x" * 20 + "\n", max_line_length=10)

    assert excinfo.value.line_number == 2


def test_scan_document_enforces_marker_limit():
    content = "# region\n# endregion\n" * 3

    with pytest.raises(TooManyMarkersError):
        scan_document(content, RegionConfig(max_markers=5))


def test_scan_file_returns_lines_and_snapshot(tmp_path: Path):
    target = _write_source(
        tmp_path,
        """
        -- region Main
        print("hi")
        -- endregion
        """,
    )

    lines, snapshot = scan_file(target)

    assert len(lines) == 3
    assert snapshot.regions == (Region(1, 3, 1, "Main", False),)


def test_scan_file_rejects_non_positive_override(tmp_path: Path):
    target = _write_source(tmp_path, "-- region\n")

    with pytest.raises(ScanFileError):
        scan_file(target, max_line_length=0)


def test_scan_file_wraps_line_length_errors(tmp_path: Path):
    target = _write_source(tmp_path, "-- " + "x" * 50 + "\n")

    with pytest.raises(ScanFileError, match="exceeding the maximum allowed length"):
        scan_file(target, RegionConfig(max_line_length=10))


def test_scan_file_wraps_marker_limit_errors(tmp_path: Path):
    target = _write_source(tmp_path, "-- region\n-- endregion\n")

    with pytest.raises(ScanFileError, match="too many region markers"):
        scan_file(target, RegionConfig(max_markers=1))


def test_scan_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "binary.lua"
    target.write_bytes(b"-- region\n\xff\xfe\n")

    with pytest.raises(ScanFileError, match="Invalid UTF-8"):
        scan_file(target)


def test_scan_file_rejects_invalid_config(tmp_path: Path):
    target = _write_source(tmp_path, "-- region\n")

    with pytest.raises(ScanFileError):
        scan_file(target, RegionConfig(fold_sentinel=""))


def test_scan_file_missing_file(tmp_path: Path):
    with pytest.raises(ScanFileError):
        scan_file(tmp_path / "missing.lua")


def test_trailing_sentinel_name_mismatches_plain_end_name():
    snapshot = scan_document("# region Foo -\nx = 1\n# endregion Foo\n")

    assert snapshot.regions == (Region(1, 3, 1, "Foo -", True),)
    assert [e.kind for e in snapshot.errors] == [RegionErrorKind.MISMATCHED_NAME]
