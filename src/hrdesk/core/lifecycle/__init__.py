"""Application lifecycle module."""

from .lifecycle_controller import (
    LifecycleController,
    compute_progress,
    get_lifecycle_controller,
)

__all__ = [
    "LifecycleController",
    "compute_progress",
    "get_lifecycle_controller",
]
