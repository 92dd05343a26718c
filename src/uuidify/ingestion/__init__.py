"""Input resolution and tree expansion."""

from .drops import CallableDropHandle, DropHandle, InputResolver, PathDropHandle, payload_to_path
from .expander import TreeExpander
from .models import ExpansionResult, LeafFile, standardize

__all__ = [
    "CallableDropHandle",
    "DropHandle",
    "ExpansionResult",
    "InputResolver",
    "LeafFile",
    "PathDropHandle",
    "TreeExpander",
    "payload_to_path",
    "standardize",
]
