from __future__ import annotations

HINT_SENTINEL = "!h!"


def find_hint(identifier: str) -> int | None:
    """Return the offset of the first `!h!` in `identifier`, or None.

    Names shorter than the sentinel never match.
    """
    if len(identifier) < len(HINT_SENTINEL):
        return None
    idx = identifier.find(HINT_SENTINEL)
    if idx == -1:
        return None
    return idx


def has_hint(identifier: str) -> bool:
    return find_hint(identifier) is not None
