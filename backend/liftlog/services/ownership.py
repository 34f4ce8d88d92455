from __future__ import annotations
from typing import Any, Optional, TypeVar

from liftlog.errors import Forbidden, NotFound
from liftlog.repositories.base import BaseRepository

T = TypeVar("T")

def _owner_of(record: Any) -> Optional[str]:
    # workouts are owned by user_id, templates by created_by
    for col in ("user_id", "created_by"):
        if hasattr(record, col):
            return getattr(record, col)
    raise TypeError(f"{type(record).__name__} has no owner column")

def is_owner(record: Any, caller_id: str) -> bool:
    return _owner_of(record) == caller_id

def load_owned(
    repo: BaseRepository[T],
    ident: str,
    caller_id: str,
    *,
    label: str,
    conceal: bool = False,
) -> T:
    """
    Fetch a parent before mutating or reading it.

    NotFound if absent, Forbidden if it belongs to someone else. With
    `conceal`, someone else's record is reported as NotFound too.
    """
    record = repo.get(ident)
    if record is None:
        raise NotFound(f"{label.capitalize()} not found")
    if not is_owner(record, caller_id):
        if conceal:
            raise NotFound(f"{label.capitalize()} not found or access denied")
        raise Forbidden(f"Not allowed for this {label}")
    return record

def load_claimable(repo: BaseRepository[T], ident: str, caller_id: str, *, label: str) -> Optional[T]:
    """Upsert variant: an absent parent is fine, the caller will own it."""
    record = repo.get(ident)
    if record is None:
        return None
    if not is_owner(record, caller_id):
        raise Forbidden(f"{label.capitalize()} id belongs to another user")
    return record
