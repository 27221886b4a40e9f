"""Text attributes applied to mention and non-mention spans."""

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Attribute:
    """A single named style property, e.g. ``Attribute("color", "red")``."""

    name: str
    value: Any


class AttributeSet(Mapping[str, Any]):
    """Immutable, ordered mapping of attribute name to value.

    Values are opaque to the listener: they are only compared for equality
    and handed to the host for application.
    """

    __slots__ = ("_items",)

    def __init__(self, attributes: Iterable[Attribute] | Mapping[str, Any] = ()):
        if isinstance(attributes, Mapping):
            pairs = list(attributes.items())
        else:
            pairs = [(attr.name, attr.value) for attr in attributes]
        items: dict[str, Any] = {}
        for name, value in pairs:
            items[name] = value
        object.__setattr__(self, "_items", items)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("AttributeSet is immutable")

    def __getitem__(self, name: str) -> Any:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return self._items == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeSet({self._items!r})"

    def as_attributes(self) -> list[Attribute]:
        return [Attribute(name, value) for name, value in self._items.items()]
