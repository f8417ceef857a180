"""Core module - shared kernel for confinedfs."""
from confinedfs.core.config import settings
from confinedfs.core.exceptions import ConfinedFSError

__all__ = ["settings", "ConfinedFSError"]
