"""
Per-parent sequence numbers (`set_order`, `exercise_order`).

Children arrive as an ordered list where each item may or may not carry an
explicit order value. Explicit values are kept verbatim (gaps allowed);
missing ones are filled with the item's 1-based position in the batch,
shifted by `start` when appending after siblings that already exist.
Two children of the same parent may not share a value.
"""
from __future__ import annotations
from typing import Iterable, Sequence, TypeVar

from pydantic import BaseModel

from liftlog.errors import DuplicateOrder

C = TypeVar("C", bound=BaseModel)

def normalize(children: Sequence[C], order_field: str, *, start: int = 0) -> list[C]:
    """Return copies of `children` with `order_field` always set."""
    ordered: list[C] = []
    seen: set[int] = set()
    for index, child in enumerate(children):
        value = getattr(child, order_field)
        if value is None:
            value = start + index + 1
            child = child.model_copy(update={order_field: value})
        if value in seen:
            raise DuplicateOrder(order_field, value)
        seen.add(value)
        ordered.append(child)
    return ordered

def ensure_disjoint(children: Iterable[BaseModel], order_field: str, existing: set[int]) -> None:
    for child in children:
        value = getattr(child, order_field)
        if value in existing:
            raise DuplicateOrder(order_field, value)
