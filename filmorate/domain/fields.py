"""Sentinel used by update payloads to tell "field omitted" apart from "field set to None"."""
from __future__ import annotations

from typing import Any


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()


def is_present(value: Any) -> bool:
    """True when an update field was supplied with a non-null value."""
    return value is not UNSET and value is not None
