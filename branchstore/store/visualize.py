"""
Store visualization utilities.

Text renderings of history, branches and staged changes, used as the
messages of the corresponding outcomes.
"""

from typing import Iterable, TYPE_CHECKING

from branchstore.store.entry import HistoryEntry

if TYPE_CHECKING:
    from branchstore.store.branch import Branch


def format_entry(entry: HistoryEntry) -> str:
    """
    Format a single commit similar to `git log`.
    
    Args:
        entry: The history entry.
    
    Returns:
        Header line, date line, and the indented message.
    """
    return f"Commit {entry.id}\nDate: {entry.date}\n\n\t{entry.message}"


def format_log(entries: Iterable[HistoryEntry]) -> str:
    """Format a sequence of commits, separated by blank lines."""
    return "\n\n".join(format_entry(entry) for entry in entries)


def format_branch_list(names: Iterable[str], current: str) -> str:
    """
    Format branch names similar to `git branch`.
    
    Args:
        names: Branch names.
        current: Name of the current branch, prefixed with '*'.
    
    Returns:
        One sorted name per line.
    """
    lines = []
    for name in sorted(names):
        prefix = "* " if name == current else "  "
        lines.append(f"{prefix}{name}")
    return "\n".join(lines)


def format_status(branch: "Branch") -> str:
    """Format the staged changes of a branch similar to `git status`."""
    lines = [f"On branch {branch.name}"]
    
    if not branch.staged:
        lines.append("Nothing to commit, working directory clean.")
        return "\n".join(lines)
    
    lines.append("Changes to be committed:")
    for change in branch.staged:
        lines.append(f"\t{change}")
    
    return "\n".join(lines)
