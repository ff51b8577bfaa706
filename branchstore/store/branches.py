"""
Branch manager for the object store.

Owns the ordered collection of branches and the name of the current one.
"""

from loguru import logger

from branchstore.store.branch import Branch
from branchstore.store.outcome import Outcome
from branchstore.store.visualize import format_branch_list


class BranchResolutionError(RuntimeError):
    """The current branch name does not resolve to an existing branch."""


class BranchManager:
    """
    Manages branches.
    
    Provides operations for:
    - Branch creation and deletion
    - Switching the current branch
    - Listing branches
    """
    
    def __init__(self, default_branch: str = "master"):
        self.branches: list[Branch] = [Branch(name=default_branch)]
        self.current_branch_name = default_branch
    
    def get_branch(self, name: str) -> Branch | None:
        """Get a branch by name."""
        for branch in self.branches:
            if branch.name == name:
                return branch
        return None
    
    def get_branch_index(self, name: str) -> int | None:
        for index, branch in enumerate(self.branches):
            if branch.name == name:
                return index
        return None
    
    @property
    def current(self) -> Branch:
        """
        The current branch.
        
        Raises:
            BranchResolutionError: If the current name does not resolve.
        """
        branch = self.get_branch(self.current_branch_name)
        if branch is None:
            raise BranchResolutionError(
                f"Current branch {self.current_branch_name} does not exist"
            )
        return branch
    
    def create_branch(self, name: str) -> Outcome:
        """
        Create a new branch from the current one.
        
        The new branch starts with copies of the current branch's items and
        history. Staged changes stay on the current branch.
        
        Args:
            name: Name of the new branch.
        
        Returns:
            Outcome with the new branch as payload.
        """
        if self.get_branch(name) is not None:
            logger.warning(f"Branch {name} already exists")
            return Outcome.fail("branch_exists", f"Branch {name} already exists.")
        
        branch = self.current.fork(name)
        self.branches.append(branch)
        logger.info(f"Created branch {name} from {self.current_branch_name}")
        return Outcome.ok(f"Created branch {name}.", branch.snapshot())
    
    def checkout_branch(self, name: str) -> Outcome:
        """
        Switch to a different branch.
        
        Args:
            name: Branch name.
        
        Returns:
            Outcome with the branch switched to as payload.
        """
        branch = self.get_branch(name)
        if branch is None:
            logger.warning(f"Branch {name} does not exist")
            return Outcome.fail("branch_not_found", f"Branch {name} does not exist.")
        
        self.current_branch_name = name
        logger.info(f"Switched to branch {name}")
        return Outcome.ok(f"Switched to branch {name}.", branch.snapshot())
    
    def remove_branch(self, name: str) -> Outcome:
        """
        Delete a branch.
        
        The current branch cannot be deleted.
        
        Args:
            name: Branch name.
        """
        if name == self.current_branch_name:
            logger.warning(f"Refusing to remove current branch {name}")
            return Outcome.fail("cannot_remove_current_branch", "Cannot remove current branch.")
        
        index = self.get_branch_index(name)
        if index is None:
            logger.warning(f"Branch {name} does not exist")
            return Outcome.fail("branch_not_found", f"Branch {name} does not exist.")
        
        del self.branches[index]
        logger.info(f"Removed branch {name}")
        return Outcome.ok(f"Removed branch {name}.")
    
    def list_branches(self) -> Outcome:
        """List branch names sorted, the current one marked with '*'."""
        names = sorted(branch.name for branch in self.branches)
        return Outcome.ok(format_branch_list(names, self.current_branch_name), names)
