from __future__ import annotations

from .errors import IdentifierError


def require_name(name: str | None, field_name: str) -> str:
    """Reject missing or blank names; catalog queries bind names as parameters."""
    if name is None or not name.strip():
        raise IdentifierError(f"{field_name} name must not be empty")
    return name
