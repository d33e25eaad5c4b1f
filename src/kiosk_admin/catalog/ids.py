"""Id normalization and ordering helpers for catalog entities."""

from __future__ import annotations
import re
from typing import Iterable, List, TypeVar

RE_WHITESPACE = re.compile(r"\s+")
RE_INVALID = re.compile(r"[^a-z0-9_]")

T = TypeVar("T")


def normalize_id(raw) -> str:
    """Turn free text into a catalog id ("Chicken Sub!" -> "chicken_sub").

    Inputs that reduce to nothing return "", which callers treat as a missing id.
    """
    if raw is None:
        return ""
    text = str(raw).strip().lower()
    text = RE_WHITESPACE.sub("_", text)
    return RE_INVALID.sub("", text)


def sort_key(entity):
    return (getattr(entity, "sort", 0) or 0, entity.id)


def sorted_entities(entities: Iterable[T]) -> List[T]:
    return sorted(entities, key=sort_key)
