from __future__ import annotations

import re


DEFAULT_CLASS_NAME = "Main"

# Heuristic only: comments and string literals are not skipped.
_PUBLIC_CLASS_RE = re.compile(r"public\s+class\s+(\w+)")


def resolve_class_name(source_text: str, default: str = DEFAULT_CLASS_NAME) -> str:
    """Return the identifier of the first ``public class`` in ``source_text``, else ``default``."""
    match = _PUBLIC_CLASS_RE.search(source_text)
    if match is None:
        return default
    return match.group(1)
