"""
Git-like object store for branchstore.

This module provides an in-memory, versioned object store inspired by git,
supporting:
- Staging and committing named values
- Immutable, newest-first commit history
- Rollback to an earlier commit
- Branch isolation by copy-on-branch
"""

from branchstore.store.outcome import Outcome, OutcomeError, FailureKind
from branchstore.store.value import NamedValue
from branchstore.store.entry import HistoryEntry
from branchstore.store.branch import Branch
from branchstore.store.branches import BranchManager, BranchResolutionError
from branchstore.store.commands import Command, CommandError, parse_command, parse_script
from branchstore.store.store import ObjectStore

__all__ = [
    "Outcome",
    "OutcomeError",
    "FailureKind",
    "NamedValue",
    "HistoryEntry",
    "Branch",
    "BranchManager",
    "BranchResolutionError",
    "Command",
    "CommandError",
    "parse_command",
    "parse_script",
    "ObjectStore",
]
