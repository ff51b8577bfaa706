"""Outcome of a store operation."""

from dataclasses import dataclass
from typing import Any, Literal


# Tags for expected failures. Every failed Outcome carries exactly one.
FailureKind = Literal[
    "branch_exists",
    "branch_not_found",
    "cannot_remove_current_branch",
    "nothing_to_commit",
    "object_not_committed",
    "no_commits_yet",
    "commit_not_found",
]


class OutcomeError(RuntimeError):
    """Raised by Outcome.unwrap() when the outcome is a failure."""
    
    def __init__(self, outcome: "Outcome"):
        super().__init__(outcome.message)
        self.outcome = outcome


@dataclass(frozen=True)
class Outcome:
    """
    Tagged result returned by every public store operation.
    
    A successful outcome carries an optional payload; a failed one carries
    a FailureKind. Expected failures are never raised.
    
    Attributes:
        message: Human-readable description of what happened.
        kind: Failure tag, None on success.
        payload: Value produced by the operation (None on failure).
    """
    
    message: str
    kind: FailureKind | None = None
    payload: Any = None
    
    @classmethod
    def ok(cls, message: str, payload: Any = None) -> "Outcome":
        """Create a successful outcome."""
        return cls(message=message, payload=payload)
    
    @classmethod
    def fail(cls, kind: FailureKind, message: str) -> "Outcome":
        """Create a failed outcome."""
        return cls(message=message, kind=kind)
    
    @property
    def success(self) -> bool:
        return self.kind is None
    
    @property
    def error(self) -> bool:
        return self.kind is not None
    
    def unwrap(self) -> Any:
        """
        Return the payload, raising if this outcome is a failure.
        
        Raises:
            OutcomeError: If the outcome failed.
        """
        if self.error:
            raise OutcomeError(self)
        return self.payload
    
    def __str__(self) -> str:
        return self.message
    
    def __repr__(self) -> str:
        if self.success:
            return f"Outcome(success, message={self.message!r})"
        return f"Outcome(failure={self.kind}, message={self.message!r})"
