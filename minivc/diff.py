"""Text summaries of what changed between two versions of a file."""

from __future__ import annotations

import difflib


def summarize(old: str, new: str, file_name: str = "") -> str:
    """Unified diff from ``old`` to ``new``.

    Returns an empty string when nothing changed. The first commit of a
    file is diffed against empty text, so every line shows as added.
    """
    label = file_name or "file"
    lines = difflib.unified_diff(
        old.splitlines(keepends=True),
        new.splitlines(keepends=True),
        fromfile=f"a/{label}",
        tofile=f"b/{label}",
    )
    out: list[str] = []
    for line in lines:
        out.append(line if line.endswith("\n") else line + "\n")
    return "".join(out)


def count_changes(diff_text: str) -> tuple[int, int]:
    """Count (added, removed) lines in a unified diff."""
    added = removed = 0
    in_hunk = False
    for line in diff_text.splitlines():
        if line.startswith("@@"):
            in_hunk = True
            continue
        if not in_hunk:
            continue
        if line.startswith("+"):
            added += 1
        elif line.startswith("-"):
            removed += 1
    return added, removed
