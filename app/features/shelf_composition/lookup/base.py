"""
Content lookup capability consumed by the strategy resolver.

The resolver only knows ``ContentLookup``. Concrete lookups are composed
from one ``DomainAdapter`` per content domain (players, teams,
catalogues, news...) plus a ``Recommender`` for personalized shelves.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from app.features.shelf_composition.domain.models import (
    Algorithm,
    ContentReference,
    Domain,
    FilterRule,
)
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class ContentLookupError(Exception):
    """Raised by lookup collaborators when a query cannot be served."""

    def __init__(self, message: str, domain: Domain | None = None, recoverable: bool = True):
        super().__init__(message)
        self.domain = domain
        self.recoverable = recoverable


class ContentLookup(Protocol):
    def filter(
        self,
        domain: Domain,
        rule: FilterRule,
        field: str | None,
        value: str | None,
        limit: int,
    ) -> list[ContentReference]: ...

    def by_algorithm(self, algorithm: Algorithm, limit: int) -> list[ContentReference]: ...

    def by_ids(self, domain: Domain, ids: Sequence[str]) -> list[ContentReference]: ...


class DomainAdapter(Protocol):
    def by_ids(self, ids: Sequence[str]) -> list[ContentReference]: ...

    def filter(
        self,
        rule: FilterRule,
        field: str | None,
        value: str | None,
        limit: int,
    ) -> list[ContentReference]: ...


class Recommender(Protocol):
    def by_algorithm(self, algorithm: Algorithm, limit: int) -> list[ContentReference]: ...


class RoutedContentLookup:
    """ContentLookup that dispatches to the adapter registered for each domain."""

    def __init__(
        self,
        adapters: Mapping[Domain, DomainAdapter],
        recommender: Recommender | None = None,
    ):
        self._adapters = dict(adapters)
        self._recommender = recommender

    def _adapter(self, domain: Domain) -> DomainAdapter:
        adapter = self._adapters.get(domain)
        if adapter is None:
            raise ContentLookupError(f"No content adapter registered for {domain.value}", domain=domain)
        return adapter

    def register(self, domain: Domain, adapter: DomainAdapter) -> None:
        self._adapters[domain] = adapter
        logger.info("Content adapter registered", domain=domain.value, adapter=type(adapter).__name__)

    def filter(
        self,
        domain: Domain,
        rule: FilterRule,
        field: str | None,
        value: str | None,
        limit: int,
    ) -> list[ContentReference]:
        return self._adapter(domain).filter(rule, field, value, limit)

    def by_algorithm(self, algorithm: Algorithm, limit: int) -> list[ContentReference]:
        if self._recommender is None:
            raise ContentLookupError("No recommender configured for personalized shelves")
        return self._recommender.by_algorithm(algorithm, limit)

    def by_ids(self, domain: Domain, ids: Sequence[str]) -> list[ContentReference]:
        if not ids:
            return []
        return self._adapter(domain).by_ids(ids)
