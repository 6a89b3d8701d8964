# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2026 gwz

"""Check Python and shell source files of the repository for a copyright notice."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Iterator, Optional

COPYRIGHT_RE = re.compile(r"Copyright\s*\(c\)\s*\d{4}(?:-\d{4})?\b")
SHELL_SHEBANG_RE = re.compile(r"^#!.*\b(?:bash|sh|zsh)\b")
TARGET_SUFFIXES = {".py", ".sh"}
SKIP_DIRS = {"build", "dist", "__pycache__", "venv"}
MAX_SCAN_LINES = 80


def _source_files(repo_root: Path) -> Iterator[Path]:
    for path in sorted(repo_root.rglob("*")):
        rel_parts = path.relative_to(repo_root).parts[:-1]
        if any(part in SKIP_DIRS or part.endswith(".egg-info") for part in rel_parts):
            continue
        # hidden directories, except the one holding this script
        if any(part.startswith(".") and part != ".github" for part in rel_parts):
            continue
        yield path


def _read_head(path: Path, max_lines: int) -> str:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            lines = []
            for _ in range(max_lines):
                line = f.readline()
                if line == "":
                    break
                lines.append(line)
    except OSError:
        return ""
    return "".join(lines)


def _is_shell_script(path: Path) -> bool:
    if path.suffix == ".sh":
        return True
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            first = f.readline()
    except OSError:
        return False
    return bool(SHELL_SHEBANG_RE.search(first))


def _is_target_source(path: Path) -> bool:
    if path.suffix in TARGET_SUFFIXES:
        return True
    if path.suffix:
        return False
    return _is_shell_script(path)


def main(repo_root: Optional[Path] = None) -> int:
    if repo_root is None:
        repo_root = Path(__file__).resolve().parent.parent.parent
    missing: list[str] = []
    scanned = 0

    for path in _source_files(repo_root):
        if not path.is_file():
            continue
        if not _is_target_source(path):
            continue
        scanned += 1
        head = _read_head(path, MAX_SCAN_LINES)
        if not COPYRIGHT_RE.search(head):
            missing.append(path.relative_to(repo_root).as_posix())

    if missing:
        print("Missing copyright notice in:")
        for path in sorted(missing):
            print(f"  - {path}")
        print(f"\nChecked {scanned} files. Missing: {len(missing)}.")
        return 1

    print(f"Checked {scanned} files. All have copyright notices.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
