"""Task Normalization — canonical form of user-supplied task fields.

Invariants:
    - normalize_title is idempotent
    - Two titles collide iff their normalized forms are equal
"""


def normalize_title(title: str) -> str:
    """Trim surrounding whitespace and lower-case. This is the uniqueness key."""
    return title.strip().lower()


def normalize_changes(changes: dict) -> dict:
    """Return a copy of partial update fields with the title normalized."""
    normalized = dict(changes)
    if "title" in normalized:
        normalized["title"] = normalize_title(normalized["title"])
    return normalized
