"""
FastAPI dependencies for the composition router.

Both the clock and the content lookup are injected so tests (and the
host application) can swap them via ``app.dependency_overrides``.
"""

from app.config import settings
from app.features.shelf_composition.domain.models import Domain
from app.features.shelf_composition.lookup.base import ContentLookup, RoutedContentLookup
from app.features.shelf_composition.lookup.memory import InMemoryDomainAdapter, StaticRecommender
from app.features.shelf_composition.services.scheduling import Clock, SystemClock

_clock = SystemClock()

# Empty catalogue per domain until the host registers repository adapters
content_lookup = RoutedContentLookup(
    adapters={
        domain: InMemoryDomainAdapter(domain, seed=settings.SHELF_RANDOM_SEED) for domain in Domain
    },
    recommender=StaticRecommender(),
)


def get_clock() -> Clock:
    return _clock


def get_content_lookup() -> ContentLookup:
    return content_lookup
