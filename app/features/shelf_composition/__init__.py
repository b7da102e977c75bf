"""
Shelf composition feature package.

This vertical slice keeps every layer related to composing shelves and
pages co-located (domain models, content lookup adapters, services and
the API router) so contributors can navigate the feature without hunting
through global folders.
"""

# Re-export the primary building blocks for easy access.
from .api.router import router as composition_router  # noqa: F401
from .domain.models import ContentReference, PageConfig, ShelfConfig  # noqa: F401
from .lookup.base import ContentLookup, RoutedContentLookup  # noqa: F401
