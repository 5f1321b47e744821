from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def to_jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, dict):
        return {camel_case(str(k)): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def to_dict(obj: Any, *, exclude: Iterable[str] = ()) -> dict:
    """Dataclass -> JSON-ready dict with camelCase keys (the SPA contract)."""
    skipped = set(exclude)
    out = {}
    for field in dataclasses.fields(obj):
        if field.name in skipped:
            continue
        out[camel_case(field.name)] = to_jsonable(getattr(obj, field.name))
    return out
