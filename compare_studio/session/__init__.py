# Path: compare_studio/session/__init__.py
# Purpose: Package initializer for the session layer.
# Layer: session.
# Details: Exposes the session state object and the embedding batch coordinator.

from .coordinator import EmbeddingCoordinator
from .state import SessionState

__all__ = ["EmbeddingCoordinator", "SessionState"]
