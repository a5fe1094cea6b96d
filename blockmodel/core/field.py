"""
Base class for the editable fields attached to block inputs.

A field owns a single value, knows how to read it from and write it to
the block's serialized forms, and notifies registered observers when
the value changes. Fields are not thread-safe; share them across
threads only under external locking.
"""

from typing import Generic, TypeVar

from blockmodel.core.schema import FieldType
from blockmodel.core.serializer import XmlFieldWriter

ObserverT = TypeVar("ObserverT")


class Field(Generic[ObserverT]):
    """A named, typed value on a block.

    Generic over the observer type the subclass notifies. Subclasses
    implement the value handling and call their observers through
    `get_observers()`, which returns a snapshot so observers may register
    or unregister while being notified.

    Args:
        name: Field name, unique within its block.
        field_type: The field's type.
    """

    def __init__(self, name: str, field_type: FieldType):
        if name is None:
            raise ValueError("Field name may not be None")
        self._name = name
        self._type = field_type
        self._observers: list[ObserverT] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> FieldType:
        return self._type

    # -----------------------------------------------------------------
    # Observers
    # -----------------------------------------------------------------

    def register_observer(self, observer: ObserverT) -> None:
        """Add an observer; observers are notified in registration order."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: ObserverT) -> bool:
        """Remove an observer. Returns True if it was registered."""
        try:
            self._observers.remove(observer)
        except ValueError:
            return False
        return True

    def get_observers(self) -> list[ObserverT]:
        """Return a copy of the registered observers."""
        return list(self._observers)

    # -----------------------------------------------------------------
    # Value handling (implemented by subclasses)
    # -----------------------------------------------------------------

    def set_from_string(self, text: str) -> bool:
        """Set the value from its string form. Returns False if unparseable."""
        raise NotImplementedError

    def get_serialized_value(self) -> str:
        """Return the value as written into serialized blocks."""
        raise NotImplementedError

    def clone(self) -> "Field[ObserverT]":
        raise NotImplementedError

    # -----------------------------------------------------------------
    # Serialization
    # -----------------------------------------------------------------

    def serialize(self, writer: XmlFieldWriter) -> None:
        """Write this field as a <field name="..."> element.

        Raises:
            OSError: If the writer's stream fails.
        """
        writer.start_tag("field").attribute("name", self._name)
        self.serialize_inner(writer)
        writer.end_tag("field")

    def serialize_inner(self, writer: XmlFieldWriter) -> None:
        """Write the element's content. Defaults to the serialized value."""
        writer.text(self.get_serialized_value())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
