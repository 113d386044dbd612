"""Folio - profile and feed controller for a design-sharing service.

This package provides functionality for:
- Resolving a user's profile by id or handle
- Paging through the user's feed of shots
- Following and unfollowing with optimistic updates
"""

__version__ = "1.0.0"
