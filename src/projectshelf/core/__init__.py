"""Core functionality for projectshelf."""

from .codec import CorruptStateError, encode_projects, decode_projects

__all__ = ["CorruptStateError", "encode_projects", "decode_projects"]
