"""Branch data structure."""

from dataclasses import dataclass, field

from loguru import logger

from branchstore.store.entry import HistoryEntry
from branchstore.store.value import NamedValue


@dataclass
class Branch:
    """
    An isolated line of development.
    
    Attributes:
        name: Unique name of the branch (e.g., "master", "dev").
        items: Materialized values keyed by name.
        staged: Pending changes, in staging order.
        history: Commits, newest first (except right after a checkout).
    """
    
    name: str
    items: dict[str, NamedValue] = field(default_factory=dict)
    staged: list[NamedValue] = field(default_factory=list)
    history: list[HistoryEntry] = field(default_factory=list)
    
    def fork(self, name: str) -> "Branch":
        """
        Create a new branch from this one.
        
        Items and history are copied; staged changes are not. Values and
        entries are immutable, so shallow copies fully isolate the branches.
        """
        return Branch(name=name, items=dict(self.items), history=list(self.history))
    
    def snapshot(self) -> "Branch":
        """Return a detached copy of this branch, staged changes included."""
        return Branch(
            name=self.name,
            items=dict(self.items),
            staged=list(self.staged),
            history=list(self.history),
        )
    
    def find_item(self, name: str) -> NamedValue | None:
        """Get a committed item by name."""
        return self.items.get(name)
    
    def find_commit_index(self, commit_id: str) -> int | None:
        """Get the position of a commit in history (0 is the most recent)."""
        for index, entry in enumerate(self.history):
            if entry.id == commit_id:
                return index
        return None
    
    @property
    def head(self) -> HistoryEntry | None:
        return self.history[0] if self.history else None
    
    def stage(self, change: NamedValue) -> None:
        """Record a pending change."""
        logger.debug(f"[{self.name}] staged {change}")
        self.staged.append(change)
    
    def sweep(self, change: NamedValue, rollback: bool = False) -> None:
        """
        Apply one change to the materialized items.
        
        In forward mode a tombstone removes the item and anything else is
        inserted. Rollback mode inverts this, undoing the original change.
        
        Args:
            change: The staged or recorded change.
            rollback: Whether to apply the inverse of the change.
        """
        if change.tombstoned != rollback:
            self.items.pop(change.name, None)
            logger.debug(f"[{self.name}] swept out {change.name}")
        else:
            self.items[change.name] = change.revive()
            logger.debug(f"[{self.name}] swept in {change.name}")
    
    def apply_staged(self, entry: HistoryEntry) -> None:
        """Sweep every staged change, record the entry, and clear the stage."""
        for change in self.staged:
            self.sweep(change)
        self.history.insert(0, entry)
        self.staged.clear()
    
    def rollback_to(self, index: int) -> None:
        """
        Reconstruct items as of the commit at `index` in history.
        
        Every newer commit is undone, newest first, with its changes inverted
        in reverse order. History is then cut to the commits from the newest
        through the target and reversed, so the target becomes the first
        entry and the commits undone follow it oldest first.
        """
        for entry in self.history[:index]:
            for change in reversed(entry.changes):
                self.sweep(change, rollback=True)
        self.history = list(reversed(self.history[: index + 1]))
    
    def __str__(self) -> str:
        head_short = self.head.id[:8] if self.head else "empty"
        return f"{self.name} -> {head_short}"
