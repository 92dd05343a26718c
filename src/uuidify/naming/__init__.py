"""Name generation and collision resolution."""

from .generator import NameGenerator, extension_of
from .resolver import CollisionResolver

__all__ = ["CollisionResolver", "NameGenerator", "extension_of"]
