"""Token normalization shared by every lookup in the resolver.

All comparisons between providers, products, taxonomy entries and incoming
requests go through :func:`normalize_token`, so the rules here are load-bearing:
products are attributed to providers only because both sides normalize their
service ids to the same token.
"""

from __future__ import annotations

import re
from typing import Any

_SEPARATORS = re.compile(r"[\s\-]+")
_DISALLOWED = re.compile(r"[^a-z0-9_]")


def normalize_token(raw: Any) -> str:
    """Normalize an identifier into a comparable token.

    - None -> ""
    - non-strings are stringified (numeric ids, for instance)
    - surrounding whitespace is trimmed, the rest is lowercased
    - each run of whitespace / hyphens becomes a single underscore
    - anything outside ``[a-z0-9_]`` is dropped

    ``normalize_token(normalize_token(x)) == normalize_token(x)`` for any input.
    """

    if raw is None:
        return ""
    text = str(raw).strip().lower()
    text = _SEPARATORS.sub("_", text)
    return _DISALLOWED.sub("", text)


__all__ = ["normalize_token"]
