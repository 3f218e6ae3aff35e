"""
Service interfaces for dependency inversion.
Allows swapping storage implementations without changing business logic.
"""

from .stores import BookingStore, CommentStore, ItemStore, UserStore

__all__ = ['BookingStore', 'CommentStore', 'ItemStore', 'UserStore']
