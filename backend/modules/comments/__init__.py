"""
Comments module.

Short comments on recipes. Authors are shown by display name, looked up
through the auth module's public profile read.

Public API:
- CommentService: add and list comments
- Comment, CommentView: stored record and the view returned by the API
"""

from .interfaces import ICommentStore
from .models import Comment, CommentView
from .service import CommentService

__all__ = [
    "ICommentStore",
    "Comment",
    "CommentView",
    "CommentService",
]
