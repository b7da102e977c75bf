from datetime import UTC, datetime, timedelta

import pytest

from app.features.shelf_composition.domain.models import (
    Algorithm,
    ContentReference,
    Domain,
)
from app.features.shelf_composition.lookup import (
    CatalogItem,
    InMemoryDomainAdapter,
    RoutedContentLookup,
    StaticRecommender,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self.current = now

    def now(self) -> datetime:
        return self.current


def ref(item_id: str, domain: Domain = Domain.CONTENT, title: str | None = None) -> ContentReference:
    return ContentReference(id=item_id, domain=domain, title=title or item_id.upper())


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def fixed_clock():
    return FixedClock()


@pytest.fixture
def content_adapter():
    items = [
        CatalogItem(
            reference=ref("v1", title="Derby Highlights"),
            published_at=NOW - timedelta(days=3),
            popularity=40,
            attributes={"genre": "Highlights"},
        ),
        CatalogItem(
            reference=ref("v2", title="anthem Rehearsal"),
            published_at=NOW - timedelta(days=1),
            popularity=90,
            attributes={"genre": "Behind the scenes"},
        ),
        CatalogItem(
            reference=ref("v3", title="Coach Interview"),
            published_at=NOW - timedelta(days=7),
            popularity=10,
            attributes={"genre": "highlights"},
        ),
    ]
    return InMemoryDomainAdapter(Domain.CONTENT, items, seed=7)


@pytest.fixture
def lookup(content_adapter):
    news = InMemoryDomainAdapter(
        Domain.NEWS,
        [CatalogItem(reference=ref("n1", Domain.NEWS, "Transfer window opens"), published_at=NOW)],
    )
    recommender = StaticRecommender(
        {
            Algorithm.BECAUSE_YOU_WATCHED: [ref("v2"), ref("v1"), ref("v3")],
            Algorithm.SUGGESTIONS_FOR_YOU: [ref("v3")],
        }
    )
    return RoutedContentLookup({Domain.CONTENT: content_adapter, Domain.NEWS: news}, recommender)


@pytest.fixture
def client(fixed_clock, lookup):
    from fastapi.testclient import TestClient

    from app.features.shelf_composition.api.dependencies import get_clock, get_content_lookup
    from app.main import app

    app.dependency_overrides[get_clock] = lambda: fixed_clock
    app.dependency_overrides[get_content_lookup] = lambda: lookup
    yield TestClient(app)
    app.dependency_overrides.clear()
