"""Base object of the data model with named properties."""

from __future__ import annotations

from typing import Any

from .object_type import ObjectType, TypeId

__all__ = ["ModelObject"]


class ModelObject:
    """A data-model object with an optional parent and a set of properties.

    Properties are kept by name; each must be owned by this object and have a
    non-empty value text to be accepted.
    """

    def __init__(self, parent: "ModelObject | None" = None) -> None:
        self.parent = parent
        self._props: dict[str, Any] = {}
        self._alive = True

    def clone(self) -> "ModelObject":
        """A new object with the same parent; properties are not carried over."""
        copy = type(self).__new__(type(self))
        ModelObject.__init__(copy, self.parent)
        return copy

    def object_type(self) -> ObjectType:
        """The type of this object."""
        return ObjectType(TypeId.OBJECT)

    def is_type_of(self, object_type: "ObjectType | TypeId | int | str") -> bool:
        """Whether this object is of the given type."""
        return ObjectType(object_type) == TypeId.OBJECT

    def dbid(self) -> int:
        """An identifier unique to this object while it exists."""
        return id(self)

    def is_alive(self) -> bool:
        """Whether the object has not been deleted."""
        return self._alive

    def _detach(self) -> None:
        """Drop links to other objects before deletion; for subclasses."""

    def delete(self) -> None:
        """Detach the object and release its properties."""
        self._detach()
        self._props.clear()
        self._alive = False

    def has_property(self) -> bool:
        """Whether any property is attached."""
        return bool(self._props)

    def add_property(self, prop: Any) -> None:
        """Attach a property; ones owned elsewhere or with empty text are ignored."""
        if prop is None or prop.owner is not self or not prop.value_string():
            return
        if self._props.get(prop.name) is prop:
            return
        self._props[prop.name] = prop

    def delete_property(self, name: str) -> None:
        """Remove the property with the given name, if any."""
        self._props.pop(name, None)

    def find_property(self, name: str) -> Any:
        """The property with the given name, or None."""
        return self._props.get(name)

    def properties(self) -> list[Any]:
        """All properties, ordered by name."""
        return [self._props[name] for name in sorted(self._props)]