"""Tests for wavegen.source_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from wavegen.source_scanner import IgnoreRules, SourceScanner, build_ignore_rule

from tests._fixtures.source_builder import SourceBuilder


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root.resolve()).as_posix() for path in paths]


def test_scan_finds_vhdl_sources_in_sorted_order(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            "tb/tb_top.vhd": "entity tb_top is end;",
            "rtl/core.vhdl": "entity core is end;",
            "rtl/LEGACY.VHD": "entity legacy is end;",
            "rtl/notes.txt": "not vhdl",
            "sim/run.tcl": "puts hi",
            ".git/objects/x.vhd": "entity hidden is end;",
        }
    )

    files = SourceScanner().scan(source_builder.path())

    assert _relative(files, source_builder.path()) == [
        "rtl/LEGACY.VHD",
        "rtl/core.vhdl",
        "tb/tb_top.vhd",
    ]


def test_scan_honours_gitignore_and_excludes(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            ".gitignore": "build/\n*_old.vhd\n!keep_old.vhd\n",
            "build/generated.vhd": "",
            "src/a.vhd": "",
            "src/a_old.vhd": "",
            "src/keep_old.vhd": "",
            "vendor/ip.vhd": "",
            "src/vendor/local.vhd": "",
        }
    )

    files = SourceScanner(exclude=["/vendor/"]).scan(source_builder.path())

    assert _relative(files, source_builder.path()) == [
        "src/a.vhd",
        "src/keep_old.vhd",
        "src/vendor/local.vhd",
    ]


def test_scan_uses_custom_include_patterns(source_builder: SourceBuilder) -> None:
    source_builder.write({"a.vhd": "", "b.vho": ""})
    files = SourceScanner(include=["*.vho"]).scan(source_builder.path())
    assert _relative(files, source_builder.path()) == ["b.vho"]


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        SourceScanner().scan(tmp_path / "missing")


def test_scan_rejects_file_path(tmp_path: Path) -> None:
    target = tmp_path / "tb.vhd"
    target.write_text("", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        SourceScanner().scan(target)


def test_build_ignore_rule_flags() -> None:
    rule = build_ignore_rule("/out/")
    assert rule is not None
    assert rule.anchored and rule.directory_only
    assert rule.matches("out", True)
    assert not rule.matches("src/out", True)
    assert build_ignore_rule("   ") is None


def test_last_matching_rule_wins() -> None:
    rules = IgnoreRules()
    rules.extend(["sim/", "!sim/", "*.vhd", "", "!tb_*.vhd"])

    assert not rules.ignores("sim", True)
    assert rules.ignores("rtl/core.vhd", False)
    assert not rules.ignores("rtl/tb_core.vhd", False)
    assert len(rules.rules) == 4


def test_gitignore_comments_are_ignored(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_text("# *.vhd\n\nbuild/\n", encoding="utf-8")
    rules = IgnoreRules.from_file(tmp_path / ".gitignore")
    assert [rule.pattern for rule in rules.rules] == ["build"]
    assert not rules.ignores("a.vhd", False)
