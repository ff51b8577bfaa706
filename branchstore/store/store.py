"""
Object store - main interface for the versioned object store.

Values are staged on the current branch, committed into an immutable
history, inspected, and rolled back to earlier commits. Branches are
isolated copies of a parent's items and history.
"""

import copy
from datetime import datetime
from typing import Any, Callable, Iterable

from loguru import logger

from branchstore.config.schema import StoreConfig
from branchstore.store.branch import Branch
from branchstore.store.branches import BranchManager, BranchResolutionError
from branchstore.store.commands import Command, CommandError
from branchstore.store.entry import HistoryEntry
from branchstore.store.outcome import Outcome
from branchstore.store.value import NamedValue
from branchstore.store.visualize import format_log, format_status


Clock = Callable[[], datetime]


def _now() -> datetime:
    return datetime.now().astimezone()


class ObjectStore:
    """
    In-memory, branch-aware object store.
    
    Every public operation returns an Outcome; expected failures are
    reported through it rather than raised.
    
    Interface:
        - add() / remove() / commit()
        - checkout() (roll back to a commit)
        - head() / log() / get() / status()
        - create_branch() / checkout_branch() / remove_branch() / list_branches()
    """
    
    def __init__(self, config: StoreConfig | None = None, clock: Clock | None = None):
        self.config = config or StoreConfig()
        self.clock = clock or _now
        self.branch_manager = BranchManager(self.config.default_branch)
    
    @classmethod
    def init(
        cls,
        commands: Iterable[Command] = (),
        config: StoreConfig | None = None,
        clock: Clock | None = None,
    ) -> "ObjectStore":
        """
        Create a store and run initialization commands against it.
        
        Commands run in order. A failed outcome does not stop the remaining
        commands.
        
        Args:
            commands: Commands to execute on the fresh store.
            config: Optional store configuration.
            clock: Optional timestamp source for commits.
        
        Returns:
            The initialized store.
        """
        store = cls(config=config, clock=clock)
        for command in commands:
            store.execute(command)
        return store
    
    def execute(self, command: Command) -> Outcome:
        """
        Run a single command.
        
        Raises:
            CommandError: If the command has no matching operation.
        """
        handlers: dict[str, Callable[..., Outcome]] = {
            "add": self.add,
            "remove": self.remove,
            "commit": self.commit,
            "checkout": self.checkout,
            "head": self.head,
            "log": self.log,
            "get": self.get,
            "status": self.status,
            "branch-create": self.create_branch,
            "branch-checkout": self.checkout_branch,
            "branch-remove": self.remove_branch,
            "branch-list": self.list_branches,
        }
        handler = handlers.get(command.name)
        if handler is None:
            raise CommandError(f"Unknown command: {command.name}")
        
        outcome = handler(*command.args)
        logger.debug(f"{command} -> {outcome!r}")
        return outcome
    
    # =========================================================================
    # Branch Selection
    # =========================================================================
    
    @property
    def branch(self) -> Branch:
        """The current branch."""
        return self.branch_manager.current
    
    @property
    def current_branch_name(self) -> str:
        return self.branch_manager.current_branch_name
    
    # =========================================================================
    # Staging
    # =========================================================================
    
    def add(self, name: str, value: Any) -> Outcome:
        """
        Stage a value under a name.
        
        If the name is already committed on the current branch, its removal
        is staged first so the commit replaces it.
        The store keeps its own copy of the value.
        
        Returns:
            Outcome with the value as payload.
        """
        if self.branch.find_item(name) is not None:
            self.remove(name)
        
        self.branch.stage(NamedValue(name, copy.deepcopy(value)))
        return Outcome.ok(f"Added {name} to stage.", copy.deepcopy(value))
    
    def remove(self, name: str) -> Outcome:
        """
        Stage the removal of a committed value.
        
        Returns:
            Outcome with the removed value as payload.
        """
        item = self.branch.find_item(name)
        if item is None:
            logger.warning(f"Object {name} is not committed")
            return Outcome.fail("object_not_committed", f"Object {name} is not committed.")
        
        self.branch.stage(item.tombstone())
        return Outcome.ok(f"Added {name} for removal.", copy.deepcopy(item.value))
    
    # =========================================================================
    # History
    # =========================================================================
    
    def commit(self, message: str) -> Outcome:
        """
        Apply staged changes and record them in history.
        
        Args:
            message: Human-readable commit message.
        
        Returns:
            Outcome with the new head entry as payload.
        """
        branch = self.branch
        if not branch.staged:
            logger.warning(f"Nothing to commit on branch {branch.name}")
            return Outcome.fail("nothing_to_commit", "Nothing to commit, working directory clean.")
        
        count = len(branch.staged)
        entry = HistoryEntry.create(
            message,
            branch.staged,
            timestamp=self.clock(),
            date_format=self.config.date_format,
        )
        branch.apply_staged(entry)
        logger.info(f"[{branch.name}] commit {entry.id[:8]}: {message} ({count} objects)")
        
        return Outcome.ok(f"{message}\n\t{count} objects changed", self._head_payload(branch))
    
    def checkout(self, commit_id: str) -> Outcome:
        """
        Roll the current branch back to a commit.
        
        Items are rebuilt as they were at the commit. History is cut to the
        commits from the most recent through the target and reversed, so the
        target becomes HEAD; commits older than the target are dropped.
        
        Args:
            commit_id: Identifier of the commit to roll back to.
        
        Returns:
            Outcome with the new head entry as payload.
        """
        branch = self.branch
        index = branch.find_commit_index(commit_id)
        if index is None:
            logger.warning(f"Commit {commit_id} does not exist on branch {branch.name}")
            return Outcome.fail("commit_not_found", f"Commit {commit_id} does not exist.")
        
        branch.rollback_to(index)
        head = self._head_payload(branch)
        logger.info(f"[{branch.name}] rolled back {index} commit(s) to {head.id[:8]}")
        return Outcome.ok(f"HEAD is now at {head.id}.", head)
    
    def head(self) -> Outcome:
        """
        Get the most recent commit of the current branch.
        
        Returns:
            Outcome with the head entry as payload and its message as message.
        """
        branch = self.branch
        if branch.head is None:
            return self._no_commits(branch)
        
        return Outcome.ok(branch.head.message, self._head_payload(branch))
    
    def log(self) -> Outcome:
        """
        Get the history of the current branch.
        
        Returns:
            Outcome with every entry rendered as the message and the entries
            as payload.
        """
        branch = self.branch
        if not branch.history:
            return self._no_commits(branch)
        
        history = tuple(branch.history)
        return Outcome.ok(format_log(history), history)
    
    def get(self, name: str) -> Outcome:
        """Get a committed value from the current branch."""
        item = self.branch.find_item(name)
        if item is None:
            logger.warning(f"Object {name} is not committed")
            return Outcome.fail("object_not_committed", f"Object {name} is not committed.")
        
        return Outcome.ok(f"Found object {name}.", copy.deepcopy(item.value))
    
    def status(self) -> Outcome:
        """Describe the staged changes of the current branch."""
        branch = self.branch
        return Outcome.ok(format_status(branch), tuple(branch.staged))
    
    def _head_payload(self, branch: Branch) -> HistoryEntry:
        head = branch.head
        if head is None:
            raise BranchResolutionError(f"Branch {branch.name} has no head commit")
        if self.config.head_overlay:
            return head.with_changes(branch.items.values())
        return head
    
    def _no_commits(self, branch: Branch) -> Outcome:
        message = f"Branch {branch.name} does not have any commits yet."
        logger.warning(message)
        return Outcome.fail("no_commits_yet", message)
    
    # =========================================================================
    # Branch Management
    # =========================================================================
    
    def create_branch(self, name: str) -> Outcome:
        """Create a branch from the current one."""
        return self.branch_manager.create_branch(name)
    
    def checkout_branch(self, name: str) -> Outcome:
        """Switch the current branch."""
        return self.branch_manager.checkout_branch(name)
    
    def remove_branch(self, name: str) -> Outcome:
        """Delete a branch other than the current one."""
        return self.branch_manager.remove_branch(name)
    
    def list_branches(self) -> Outcome:
        """List branches, marking the current one."""
        return self.branch_manager.list_branches()
    
    def __repr__(self) -> str:
        return (
            f"ObjectStore(branch={self.current_branch_name}, "
            f"branches={len(self.branch_manager.branches)})"
        )
