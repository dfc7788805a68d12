"""
Enumeration definitions for fixed options.
"""

from enum import Enum


class FollowingType(str, Enum):
    """Kind of entity on the receiving end of a follow edge"""
    USER = "user"
    TAG = "tag"
    ARTICLE = "article"
    ARTICLE_WATCH = "article_watch"
