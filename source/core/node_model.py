"""Value types for a selected node: rows, editable fields and path segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, TypeAlias

from core import constants as app_constants


@dataclass(frozen=True, slots=True)
class Index:
    """Array position inside a path."""

    position: int

    def __post_init__(self) -> None:
        if isinstance(self.position, bool) or not isinstance(self.position, int):
            raise TypeError(f"Index position must be int, got {type(self.position).__name__}")
        if self.position < 0:
            raise ValueError(f"Index position must be non-negative, got {self.position}")


@dataclass(frozen=True, slots=True)
class Key:
    """Object property name inside a path."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Key name must be str, got {type(self.name).__name__}")


PathSegment: TypeAlias = Index | Key
Path: TypeAlias = tuple[PathSegment, ...]


def to_segment(raw: Any) -> PathSegment:
    if isinstance(raw, (Index, Key)):
        return raw
    if isinstance(raw, bool):
        raise TypeError("Path segments cannot be booleans")
    if isinstance(raw, int):
        return Index(raw)
    if isinstance(raw, str):
        return Key(raw)
    raise TypeError(f"Unsupported path segment: {raw!r}")


def to_path(raw: Iterable[Any] | None) -> Path:
    """Convert a list of ints/strings (or segments) into a typed path; None is the root."""
    if raw is None:
        return ()
    return tuple(to_segment(item) for item in raw)


def segment_value(segment: PathSegment) -> int | str:
    match segment:
        case Index(position=position):
            return position
        case Key(name=name):
            return name
    raise TypeError(f"Unsupported path segment: {segment!r}")


def path_values(path: Path) -> list[int | str]:
    return [segment_value(segment) for segment in path]


@dataclass(frozen=True, slots=True)
class KeyedRow:
    """One visible field of an object node."""

    key: str
    value: Any
    type: str = app_constants.ROW_TYPE_STRING

    @property
    def is_container(self) -> bool:
        return self.type in app_constants.CONTAINER_ROW_TYPES


@dataclass(frozen=True, slots=True)
class ScalarRow:
    """The whole node is a single unkeyed primitive."""

    value: Any
    type: str = app_constants.ROW_TYPE_STRING

    @property
    def is_container(self) -> bool:
        return self.type in app_constants.CONTAINER_ROW_TYPES


Row: TypeAlias = KeyedRow | ScalarRow


def check_rows(rows: Iterable[Row]) -> tuple[Row, ...]:
    """Return rows as a tuple, rejecting a scalar row mixed with other rows."""
    items = tuple(rows)
    for row in items:
        if not isinstance(row, (KeyedRow, ScalarRow)):
            raise TypeError(f"Unsupported row: {row!r}")
        if row.type not in app_constants.ROW_TYPES:
            raise ValueError(f"Unknown row type: {row.type!r}")
    scalar_count = sum(1 for row in items if isinstance(row, ScalarRow))
    if scalar_count and len(items) != 1:
        raise ValueError("A scalar row must be the only row of its node")
    return items


@dataclass(frozen=True, slots=True)
class SelectedNode:
    """Node handed over by the selection provider."""

    rows: tuple[Row, ...] = ()
    path: Path = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", check_rows(self.rows))
        object.__setattr__(self, "path", to_path(self.path))

    @property
    def has_keys(self) -> bool:
        return any(isinstance(row, KeyedRow) for row in self.rows)


@dataclass(frozen=True, slots=True)
class KeyedField:
    """Edit-mode projection of a keyed row; key is None until the user names it."""

    key: str | None
    value: str = ""
    type: str = app_constants.ROW_TYPE_STRING


@dataclass(frozen=True, slots=True)
class ScalarField:
    """Edit-mode projection of a bare scalar node."""

    value: str = ""
    type: str = app_constants.ROW_TYPE_STRING


EditableField: TypeAlias = KeyedField | ScalarField


@dataclass(frozen=True, slots=True)
class Coerced:
    """Typed value produced from field text; used_fallback marks a kept raw string."""

    value: Any
    used_fallback: bool = False

