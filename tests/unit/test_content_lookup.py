import pytest

from app.features.shelf_composition.domain.models import (
    Algorithm,
    ContentReference,
    Domain,
    FilterRule,
)
from app.features.shelf_composition.lookup import (
    CatalogItem,
    ContentLookupError,
    InMemoryDomainAdapter,
    RoutedContentLookup,
)


def _ids(refs) -> list[str]:
    return [ref.id for ref in refs]


def test_filter_rules(content_adapter):
    assert _ids(content_adapter.filter(FilterRule.RECENT, None, None, 10)) == ["v2", "v1", "v3"]
    assert _ids(content_adapter.filter(FilterRule.TOP, None, None, 2)) == ["v2", "v1"]
    # Case-insensitive title ordering
    assert _ids(content_adapter.filter(FilterRule.ALPHABETICAL, None, None, 10)) == ["v2", "v3", "v1"]


def test_random_rule_respects_limit_and_membership(content_adapter):
    picked = _ids(content_adapter.filter(FilterRule.RANDOM, None, None, 2))
    assert len(picked) == 2
    assert set(picked) <= {"v1", "v2", "v3"}


def test_field_filter_is_case_insensitive(content_adapter):
    refs = content_adapter.filter(FilterRule.RECENT, "genre", "HIGHLIGHTS", 10)
    assert _ids(refs) == ["v1", "v3"]


def test_by_ids_skips_unknown(content_adapter):
    assert _ids(content_adapter.by_ids(["v3", "nope", "v1"])) == ["v3", "v1"]


def test_adapter_rejects_foreign_domain_items():
    adapter = InMemoryDomainAdapter(Domain.NEWS)
    with pytest.raises(ValueError):
        adapter.add(CatalogItem(reference=ContentReference(id="v1", domain=Domain.CONTENT, title="V1")))


def test_routed_lookup_dispatches_by_domain(lookup):
    assert _ids(lookup.by_ids(Domain.NEWS, ["n1"])) == ["n1"]
    assert _ids(lookup.by_algorithm(Algorithm.SUGGESTIONS_FOR_YOU, 5)) == ["v3"]
    assert lookup.by_ids(Domain.AGENT, []) == []


def test_routed_lookup_without_adapter_raises():
    routed = RoutedContentLookup({})

    with pytest.raises(ContentLookupError) as exc:
        routed.filter(Domain.GROUP, FilterRule.TOP, None, None, 5)
    assert exc.value.domain is Domain.GROUP

    with pytest.raises(ContentLookupError):
        routed.by_algorithm(Algorithm.BECAUSE_YOU_WATCHED, 5)


def test_register_adds_adapter():
    routed = RoutedContentLookup({})
    routed.register(Domain.AGENDA, InMemoryDomainAdapter(Domain.AGENDA))
    assert routed.filter(Domain.AGENDA, FilterRule.RECENT, None, None, 5) == []
