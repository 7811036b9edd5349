"""Type identifiers of data-model objects and their names."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["TypeId", "ObjectType"]


class TypeId(IntEnum):
    """Numeric identifier of an object type."""

    UNKNOWN = 0
    OBJECT = 1
    GOBJECT = 2
    RECTANGLE = 3
    ELLIPSE = 4
    POLYGON = 5
    POLYLINE = 6
    ARC = 7
    SHAPE = 10
    GRAPH_ELEMENT = 20
    LABEL = 30
    NODE = 40
    PIN = 50
    COMPOSITE_PIN = 60
    SYMBOL = 70
    NET = 80
    LIB_SYMBOL = 90
    EDGE_SECTION = 100
    RTREE = 110
    STYLE = 120
    THEME = 130
    STYLE_MANAGER = 140
    MAX_OBJECT_TYPES = 200


# LIB_SYMBOL has no name entry; it reports as "Unknown".
_TYPE_NAMES: dict[TypeId, str] = {
    TypeId.UNKNOWN: "Unknown",
    TypeId.OBJECT: "Object",
    TypeId.GOBJECT: "GObject",
    TypeId.RECTANGLE: "Rectangle",
    TypeId.ELLIPSE: "Ellipse",
    TypeId.POLYGON: "Polygon",
    TypeId.POLYLINE: "Polyline",
    TypeId.ARC: "Arc",
    TypeId.SHAPE: "Shape",
    TypeId.GRAPH_ELEMENT: "GraphElement",
    TypeId.LABEL: "Label",
    TypeId.NODE: "Node",
    TypeId.PIN: "Pin",
    TypeId.COMPOSITE_PIN: "CompositePin",
    TypeId.SYMBOL: "Symbol",
    TypeId.NET: "Net",
    TypeId.EDGE_SECTION: "EdgeSection",
    TypeId.RTREE: "RTree",
    TypeId.STYLE: "Style",
    TypeId.THEME: "Theme",
    TypeId.STYLE_MANAGER: "StyleManager",
    TypeId.MAX_OBJECT_TYPES: "kMaxObjectTypes",
}

_NAME_TYPES: dict[str, TypeId] = {name: type_id for type_id, name in _TYPE_NAMES.items()}


def _from_int(value: int) -> TypeId:
    if value < TypeId.UNKNOWN or value >= TypeId.MAX_OBJECT_TYPES:
        return TypeId.UNKNOWN
    try:
        return TypeId(value)
    except ValueError:
        return TypeId.UNKNOWN


class ObjectType:
    """An object type, built from a type id, a number or a type name.

    Ids outside the valid range and unrecognised names become ``UNKNOWN``.
    """

    __slots__ = ("_type",)

    def __init__(self, value: "TypeId | int | str | ObjectType" = TypeId.UNKNOWN) -> None:
        if isinstance(value, ObjectType):
            self._type = value._type
        elif isinstance(value, str):
            self._type = _NAME_TYPES.get(value, TypeId.UNKNOWN)
        elif isinstance(value, int) and not isinstance(value, bool):
            self._type = _from_int(value)
        else:
            raise TypeError(f"cannot build an ObjectType from {type(value).__name__}")

    @property
    def name(self) -> str:
        """The type's name, or ``"Unknown"`` when it has none."""
        return _TYPE_NAMES.get(self._type, _TYPE_NAMES[TypeId.UNKNOWN])

    @property
    def type(self) -> TypeId:
        """The type id."""
        return self._type

    def __int__(self) -> int:
        return int(self._type)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObjectType):
            return self._type == other._type
        if isinstance(other, int) and not isinstance(other, bool):
            return int(self._type) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(int(self._type))

    def __repr__(self) -> str:
        return f"ObjectType(TypeId.{self._type.name})"