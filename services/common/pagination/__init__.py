"""
Common pagination utilities.

Page-number/page-size pagination with a generic paged result model.
"""

from .schemas import PagedData, PageRequest

__all__ = [
    "PagedData",
    "PageRequest",
]
