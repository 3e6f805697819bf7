"""Swappable infrastructure providers.

Importing the production implementations here registers them as
subclasses of their component bases.
"""

from .google import GoogleProvider, ProdGoogleProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "GoogleProvider",
    "PersistenceProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]
