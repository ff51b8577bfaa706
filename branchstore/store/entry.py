"""History entry data structure."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Iterable

from branchstore.store.hash import DEFAULT_DATE_FORMAT, compute_commit_id, format_timestamp
from branchstore.store.value import NamedValue


@dataclass(frozen=True)
class HistoryEntry:
    """
    An immutable snapshot recorded by a commit.
    
    Attributes:
        message: Human-readable commit message.
        changes: The staged changes applied by this commit, in staging order.
        timestamp: When the commit was created.
        date_format: strftime format used for the id and for display.
        id: Identifier derived from timestamp and message (computed automatically).
    """
    
    message: str
    changes: tuple[NamedValue, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())
    date_format: str = DEFAULT_DATE_FORMAT
    
    id: str = field(default="", init=False, compare=False)
    
    def __post_init__(self) -> None:
        """Freeze the change list and compute the identifier."""
        object.__setattr__(self, "changes", tuple(self.changes))
        if not self.id:
            object.__setattr__(
                self, "id", compute_commit_id(self.timestamp, self.message, self.date_format)
            )
    
    @classmethod
    def create(
        cls,
        message: str,
        changes: Iterable[NamedValue],
        timestamp: datetime | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> "HistoryEntry":
        """Create an entry from a snapshot of the given changes."""
        return cls(
            message=message,
            changes=tuple(changes),
            timestamp=timestamp or datetime.now().astimezone(),
            date_format=date_format,
        )
    
    @property
    def date(self) -> str:
        """Formatted timestamp."""
        return format_timestamp(self.timestamp, self.date_format)
    
    def with_changes(self, changes: Iterable[NamedValue]) -> "HistoryEntry":
        """Return a copy with the same id that reports other changes."""
        return replace(self, changes=tuple(changes))
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HistoryEntry):
            return NotImplemented
        return self.id == other.id
    
    def __hash__(self) -> int:
        return hash(self.id)
    
    def __repr__(self) -> str:
        return f"HistoryEntry(id={self.id[:8]}..., message={self.message!r}, changes={len(self.changes)})"
