"""Named value data structure."""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, eq=False)
class NamedValue:
    """
    A named value, the unit that is staged and committed.
    
    Two named values are equal when their names are equal, so a collection
    of them behaves like a set keyed by name.
    
    Attributes:
        name: Unique name of the value within a collection.
        value: The stored object (any Python value).
        tombstoned: True when this entry stands for a pending removal.
    """
    
    name: str
    value: Any = None
    tombstoned: bool = False
    
    def tombstone(self) -> "NamedValue":
        """Return a copy of this value marked for removal."""
        return replace(self, tombstoned=True)
    
    def revive(self) -> "NamedValue":
        """Return a copy of this value with the removal mark cleared."""
        return replace(self, tombstoned=False)
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamedValue):
            return NotImplemented
        return self.name == other.name
    
    def __hash__(self) -> int:
        return hash(self.name)
    
    def __str__(self) -> str:
        marker = "-" if self.tombstoned else "+"
        return f"{marker} {self.name}"
    
    def __repr__(self) -> str:
        return f"NamedValue(name={self.name!r}, value={self.value!r}, tombstoned={self.tombstoned})"
