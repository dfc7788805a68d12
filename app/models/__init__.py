"""
Models package initialization
"""

from .user import User
from .follow import Follow

__all__ = ["User", "Follow"]
