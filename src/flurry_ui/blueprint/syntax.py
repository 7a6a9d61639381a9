"""Syntax objects shared by the text parser and the blueprint loader."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, NamedTuple

from ..core.errors import SourceLocation


class Attribute(NamedTuple):
    """One ``name = value`` pair as written by the author."""

    name: str
    value: Any
    location: SourceLocation | None = None


@dataclass(frozen=True)
class AttributeTable:
    """
    Per-occurrence collection of attributes.

    Entries keep source order so that lookups honor the first occurrence
    of a repeated name.
    """

    entries: tuple[Attribute, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]]) -> "AttributeTable":
        """Build a table from plain ``(name, value)`` pairs."""
        return cls(tuple(Attribute(name, value) for name, value in pairs))

    def find(self, name: str) -> Attribute | None:
        """First entry with the given name."""
        for attr in self.entries:
            if attr.name == name:
                return attr
        return None

    def names(self) -> list[str]:
        """Attribute names in source order, repeats included."""
        return [attr.name for attr in self.entries]

    def duplicates(self) -> list[Attribute]:
        """Entries that repeat an earlier name."""
        seen: set[str] = set()
        repeated = []
        for attr in self.entries:
            if attr.name in seen:
                repeated.append(attr)
            seen.add(attr.name)
        return repeated

    def __contains__(self, name: object) -> bool:
        return any(attr.name == name for attr in self.entries)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class Occurrence:
    """
    One element occurrence: keyword, arguments, attributes and children.

    ``children`` is ``None`` when no children block was written and a
    (possibly empty) tuple when one was.
    """

    keyword: str
    attributes: AttributeTable = field(default_factory=AttributeTable)
    arguments: tuple[Any, ...] = ()
    children: tuple["Occurrence", ...] | None = None
    location: SourceLocation | None = None


__all__ = ["Attribute", "AttributeTable", "Occurrence"]
