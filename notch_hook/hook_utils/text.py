"""Text helpers for notification bodies.

Budgets are counted in Unicode code points, so multi-byte text (CJK, emoji)
is cut on character boundaries.
"""


def truncate(text, limit: int) -> str:
    """Return at most ``limit`` characters of text. Never raises."""
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    if limit <= 0:
        return ""
    return text[:limit]


def first_lines(text: str, count: int, sep: str = " | ") -> str:
    """Join the first ``count`` lines of text with sep."""
    if not text:
        return ""
    return sep.join(text.splitlines()[:count])


def output_preview(text: str, lines: int, limit: int) -> str:
    """Single-line preview of command output: first lines joined, then truncated."""
    return truncate(first_lines(text, lines), limit)
