"""HR and applicant read views."""

from .view_assembler import (
    ViewAssembler,
    build_progress_entries,
    get_view_assembler,
)

__all__ = [
    "ViewAssembler",
    "build_progress_entries",
    "get_view_assembler",
]
