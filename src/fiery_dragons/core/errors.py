"""
Error hierarchy for the Fiery Dragons engine.

Illegal moves are ordinary gameplay outcomes and never raise. Exceptions
are reserved for data the engine refuses to build a board from, and for
misuse of the engine from inside its own callbacks.

Usage:
    from fiery_dragons.core.errors import CorruptSaveError

    try:
        state = load_game(path)
    except CorruptSaveError as e:
        logger.error(f"Cannot resume: {e}")
"""

__all__ = [
    "ConfigurationError",
    "CorruptSaveError",
    "FieryDragonsError",
    "ReentrantCallError",
    "StructuralError",
]


class FieryDragonsError(Exception):
    """Base exception for all engine errors."""


class StructuralError(FieryDragonsError, ValueError):
    """A ring, cave or dragon layout violates a board invariant."""


class ConfigurationError(StructuralError):
    """The game configuration cannot produce a playable board."""


class CorruptSaveError(StructuralError):
    """A persisted game record is malformed or inconsistent."""


class ReentrantCallError(FieryDragonsError, RuntimeError):
    """An event callback tried to drive the engine while it was dispatching."""
