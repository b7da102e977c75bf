"""
In-memory lookup adapters.

Used for local development and tests, and as the reference behaviour for
the four filter rules when a real repository adapter is written.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from app.features.shelf_composition.domain.models import (
    Algorithm,
    ContentReference,
    Domain,
    FilterRule,
)


@dataclass(slots=True)
class CatalogItem:
    """A catalogue row: the reference plus the fields filter rules look at."""

    reference: ContentReference
    published_at: datetime | None = None
    popularity: float = 0.0
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.reference.id


class InMemoryDomainAdapter:
    def __init__(self, domain: Domain, items: Iterable[CatalogItem] = (), seed: int | None = None):
        self.domain = domain
        self._items: dict[str, CatalogItem] = {}
        self._random = random.Random(seed)
        for item in items:
            self.add(item)

    def add(self, item: CatalogItem) -> None:
        if item.reference.domain != self.domain:
            raise ValueError(
                f"Item {item.id} belongs to {item.reference.domain.value}, not {self.domain.value}"
            )
        self._items[item.id] = item

    def discard(self, item_id: str) -> None:
        self._items.pop(item_id, None)

    def by_ids(self, ids: Sequence[str]) -> list[ContentReference]:
        # Unknown ids are skipped; callers compare against what they asked for
        return [self._items[i].reference for i in ids if i in self._items]

    def filter(
        self,
        rule: FilterRule,
        field: str | None,
        value: str | None,
        limit: int,
    ) -> list[ContentReference]:
        candidates = [item for item in self._items.values() if _matches(item, field, value)]

        if rule is FilterRule.RANDOM:
            candidates = self._random.sample(candidates, k=min(limit, len(candidates)))
        elif rule is FilterRule.RECENT:
            candidates.sort(key=_recency, reverse=True)
        elif rule is FilterRule.ALPHABETICAL:
            candidates.sort(key=lambda item: item.reference.title.casefold())
        elif rule is FilterRule.TOP:
            candidates.sort(key=lambda item: item.popularity, reverse=True)

        return [item.reference for item in candidates[:limit]]


def _recency(item: CatalogItem) -> float:
    # Undated items sort last
    if item.published_at is None:
        return float("-inf")
    return item.published_at.timestamp()


def _matches(item: CatalogItem, field: str | None, value: str | None) -> bool:
    if not field or value is None or value == "":
        return True
    if field == "title":
        actual = item.reference.title
    else:
        actual = item.attributes.get(field)
    return actual is not None and actual.casefold() == value.casefold()


class StaticRecommender:
    """Recommender returning fixed, pre-ranked lists per algorithm."""

    def __init__(self, results: Mapping[Algorithm, Sequence[ContentReference]] | None = None):
        self._results = {algorithm: list(refs) for algorithm, refs in (results or {}).items()}

    def by_algorithm(self, algorithm: Algorithm, limit: int) -> list[ContentReference]:
        return self._results.get(algorithm, [])[:limit]
