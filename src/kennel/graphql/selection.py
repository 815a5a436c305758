"""
Selection trees consumed by the engine
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field as dataclass_field
from typing import Any


@dataclass(frozen=True)
class FieldSelection:
    """One requested field and, for relationships, the fields wanted beneath it.

    ``arguments`` is only meaningful on root fields; entity fields take none.
    """

    name: str
    selections: tuple["FieldSelection", ...] = ()
    alias: str | None = None
    arguments: Mapping[str, Any] = dataclass_field(default_factory=dict, compare=False)

    @property
    def response_key(self) -> str:
        """Key under which this field's value appears in the result."""
        return self.alias or self.name


Selection = Sequence[FieldSelection]


def select(*fields: "str | FieldSelection") -> tuple[FieldSelection, ...]:
    """Build a selection from field names and nested selections.

    Example: ``select("name", field("pets", "name"))`` selects an owner's
    name and the name of each of their pets.
    """
    return tuple(f if isinstance(f, FieldSelection) else FieldSelection(f) for f in fields)


def field(name: str, *children: "str | FieldSelection", alias: str | None = None) -> FieldSelection:
    """Build a field selection with optional nested children."""
    return FieldSelection(name=name, selections=select(*children), alias=alias)
