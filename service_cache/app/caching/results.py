"""
Result wrappers returned by cached and live fetches.

Every fetch result exposes one operation, ``materialize()``, returning plain
JSON-compatible data (dicts, lists, strings, numbers, booleans, None). A cache
hit and the miss that populated it materialize to equal data, so callers cannot
tell them apart by shape.
"""

import copy
from typing import Any, List, Protocol, Sequence, Union, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class ResultWrapper(Protocol):
    """Anything that can be materialized to plain structured data."""

    def materialize(self) -> Any:
        ...


class SnapshotResult:
    """Result backed by an already-materialized data snapshot."""

    __slots__ = ("_data",)

    def __init__(self, data: Any):
        self._data = data

    def materialize(self) -> Any:
        # Callers may mutate what they get back; the snapshot stays intact.
        return copy.deepcopy(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SnapshotResult):
            return self._data == other._data
        return NotImplemented

    def __repr__(self) -> str:
        return f"SnapshotResult({self._data!r})"


class ModelResult:
    """Live result wrapping a pydantic model or a sequence of models."""

    __slots__ = ("_value",)

    def __init__(self, value: Union[BaseModel, Sequence[BaseModel], None]):
        self._value = value

    @property
    def value(self) -> Union[BaseModel, Sequence[BaseModel], None]:
        return self._value

    def materialize(self) -> Any:
        if self._value is None:
            return None
        if isinstance(self._value, BaseModel):
            return self._value.model_dump(mode="json")
        items: List[Any] = []
        for item in self._value:
            items.append(item.model_dump(mode="json"))
        return items

    def __repr__(self) -> str:
        return f"ModelResult({self._value!r})"
