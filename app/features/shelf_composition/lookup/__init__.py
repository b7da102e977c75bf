"""
Content lookup capability and its adapters.
"""

from .base import (
    ContentLookup,
    ContentLookupError,
    DomainAdapter,
    Recommender,
    RoutedContentLookup,
)
from .memory import CatalogItem, InMemoryDomainAdapter, StaticRecommender

__all__ = [
    "CatalogItem",
    "ContentLookup",
    "ContentLookupError",
    "DomainAdapter",
    "InMemoryDomainAdapter",
    "Recommender",
    "RoutedContentLookup",
    "StaticRecommender",
]
