"""Short, single-line renderings for findings and CLI summaries."""

from __future__ import annotations

from collections.abc import Sequence


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``1 term``, ``3 terms``, ``2 entries``."""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def shorten_path(path: str, max_len: int = 32) -> str:
    """Drop leading directories until the path fits, marking the cut.

    ``src/edgedoc/graph/dependency.py`` -> ``.../graph/dependency.py``.
    The file name itself is never cut.
    """
    if len(path) <= max_len:
        return path
    parts = path.split("/")
    while len(parts) > 1:
        parts = parts[1:]
        candidate = ".../" + "/".join(parts)
        if len(candidate) <= max_len or len(parts) == 1:
            return candidate
    return path


def summarize(items: Sequence[str], *, shown: int = 3, width: int = 60) -> str:
    """Comma-joined names, collapsed to ``a, b, +N more`` when too many or too wide.

    Feature ids, interface ids and file paths all go through here; paths are
    shortened first.
    """
    names = [shorten_path(item) if "/" in item else item for item in items]
    if len(names) <= shown:
        text = ", ".join(names)
        if len(text) <= width or len(names) == 1:
            return text
        shown = len(names) - 1

    while shown > 0:
        text = ", ".join(names[:shown]) + f", +{len(names) - shown} more"
        if len(text) <= width:
            return text
        shown -= 1
    return pluralize(len(names), "item")


def truncate_at_word(text: str, max_len: int = 40, suffix: str = "...") -> str:
    """Cut ``text`` to ``max_len`` characters, on a space when there is one."""
    if len(text) <= max_len:
        return text
    room = max_len - len(suffix)
    if room <= 0:
        return suffix
    head = text[:room]
    cut = head.rfind(" ")
    return (head[:cut] if cut > 0 else head) + suffix


def format_elapsed(elapsed_ms: float) -> str:
    """``850ms``, ``2.4s``, ``1m 30s``."""
    if elapsed_ms < 0:
        raise ValueError("elapsed time must be non-negative")
    if elapsed_ms < 1000:
        return f"{elapsed_ms:.0f}ms"
    seconds = elapsed_ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, rest = divmod(int(seconds), 60)
    return f"{minutes}m {rest}s"
