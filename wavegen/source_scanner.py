"""Discovery of VHDL source files under a folder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import DEFAULT_INCLUDE
from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "__pycache__",
    ".pytest_cache",
    ".Xil",
}


@dataclass(frozen=True)
class IgnoreRule:
    """One ``.gitignore``-style pattern; ``!`` lines re-include what earlier rules hid."""

    pattern: str
    directory_only: bool = False
    anchored: bool = False
    negate: bool = False

    @classmethod
    def parse(cls, line: str) -> "IgnoreRule | None":
        text = line.strip()
        negate = text.startswith("!")
        text = text.lstrip("!")
        directory_only = text.endswith("/")
        anchored = text.startswith("/")
        text = text.strip("/")
        if not text:
            return None
        return cls(text, directory_only=directory_only, anchored=anchored, negate=negate)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if not (self.anchored or "/" in self.pattern):
            # bare names match at any depth
            return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))
        return fnmatchcase(rel_path, self.pattern)


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    """Parse one exclude pattern, returning None for blank input."""
    return IgnoreRule.parse(pattern)


class IgnoreRules:
    """Ordered rule set where the last matching rule decides."""

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self.rules: List[IgnoreRule] = list(rules)

    @classmethod
    def from_file(cls, path: Path) -> "IgnoreRules":
        if not path.is_file():
            return cls()
        lines = path.read_text(encoding="utf-8").splitlines()
        parsed = (IgnoreRule.parse(line) for line in lines if not line.lstrip().startswith("#"))
        return cls(rule for rule in parsed if rule is not None)

    def extend(self, patterns: Iterable[str]) -> None:
        for pattern in patterns:
            rule = IgnoreRule.parse(pattern)
            if rule is not None:
                self.rules.append(rule)

    def ignores(self, rel_path: str, is_dir: bool) -> bool:
        for rule in reversed(self.rules):
            if rule.matches(rel_path, is_dir):
                return not rule.negate
        return False


class SourceScanner:
    """Walks a folder and returns matching source files in a stable order."""

    def __init__(
        self,
        include: Sequence[str] = DEFAULT_INCLUDE,
        exclude: Sequence[str] = (),
    ) -> None:
        self.include = tuple(include)
        self.exclude = tuple(exclude)
        self.logger = get_logger("scanner")

    def scan(self, folder: str | Path) -> List[Path]:
        root = Path(folder).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Source folder not found: {folder}")
        if not root.is_dir():
            raise NotADirectoryError(f"Source folder is not a directory: {folder}")

        rules = IgnoreRules.from_file(root / ".gitignore")
        rules.extend(self.exclude)

        files = sorted(self._iter_files(root, rules), key=lambda p: p.relative_to(root).as_posix())
        self.logger.debug("Found %d source files under %s", len(files), root)
        return files

    def _iter_files(self, root: Path, rules: IgnoreRules) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = current.relative_to(root).as_posix() if current != root else ""

            kept = []
            for name in dirnames:
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if rules.ignores(rel_path, True):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in filenames:
                if not self._included(filename):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if rules.ignores(rel_path, False):
                    continue
                yield current / filename

    def _included(self, filename: str) -> bool:
        lower = filename.lower()
        return any(fnmatchcase(lower, pattern.lower()) for pattern in self.include)


__all__ = ["IgnoreRule", "IgnoreRules", "SourceScanner", "build_ignore_rule"]
