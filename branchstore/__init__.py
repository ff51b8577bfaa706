"""
branchstore - A minimal in-memory, branch-aware object store.
"""

__version__ = "0.1.0"
__logo__ = "🌿"

from branchstore.store import ObjectStore, Outcome

__all__ = ["ObjectStore", "Outcome", "__version__", "__logo__"]
