"""
Selection strategy rules for shelves.

A shelf picks its items one of three ways: a hand-ordered list of ids
(Manual), a filter rule over a domain (Automatic) or a named
recommendation algorithm (Personalized). This module keeps a
``ShelfConfig`` consistent with its active strategy, reports per-field
validation issues, and turns a config into the ordered references a
shelf renders.

Service layer returns domain models only - the API layer handles HTTP concerns.
"""

from __future__ import annotations

from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from app.config import settings
from app.features.shelf_composition.domain.models import (
    LIMIT_MAX,
    LIMIT_MIN,
    ContentReference,
    Domain,
    EditResult,
    FieldIssue,
    Rejection,
    ShelfConfig,
    ShelfEdit,
    Strategy,
)
from app.features.shelf_composition.lookup.base import ContentLookup, ContentLookupError
from app.features.shelf_composition.services import ordered_list
from app.infrastructure.observability.logging import get_logger, log_rejection

logger = get_logger(__name__)

_URL_ADAPTER = TypeAdapter(HttpUrl)

AUTOMATIC_FIELDS = ("filter_domain", "filter_rule", "filter_field", "filter_value")

DOMAIN_FIELDS: dict[Domain, tuple[str, ...]] = {
    Domain.CONTENT: ("title", "genre", "releaseDate", "duration"),
    Domain.COLLECTION: ("title", "description"),
    Domain.NEWS: ("title", "category", "publishDate"),
    Domain.AGENT: ("name", "type"),
    Domain.GROUP: ("name", "category"),
    Domain.AGENDA: ("title", "eventDate"),
    Domain.BANNER: (),
}


def domain_fields(domain: Domain) -> tuple[str, ...]:
    """Fields an Automatic shelf may filter on for ``domain``."""
    return DOMAIN_FIELDS.get(domain, ())


def new_shelf_config(
    shelf_id: str,
    title: str,
    strategy: Strategy = Strategy.MANUAL,
    domain: Domain = Domain.CONTENT,
) -> ShelfConfig:
    """Blank shelf with the editor defaults for ``strategy``."""
    limit = None if strategy is Strategy.MANUAL else settings.SHELF_DEFAULT_LIMIT
    if strategy is not Strategy.MANUAL and domain is Domain.BANNER:
        domain = Domain.CONTENT
    return ShelfConfig(id=shelf_id, title=title, strategy=strategy, domain=domain, limit=limit)


def _cleared_params(strategy: Strategy) -> dict[str, Any]:
    """Field updates that blank every parameter not owned by ``strategy``."""
    update: dict[str, Any] = {}
    if strategy is not Strategy.MANUAL:
        update["selected_items"] = ()
    if strategy is not Strategy.AUTOMATIC:
        update.update(dict.fromkeys(AUTOMATIC_FIELDS))
    if strategy is not Strategy.PERSONALIZED:
        update["algorithm"] = None
    if strategy is Strategy.MANUAL:
        # Manual shelves are exactly their selected items
        update["limit"] = None
    return update


def on_strategy_change(config: ShelfConfig, new_strategy: Strategy) -> ShelfConfig:
    update = _cleared_params(new_strategy)
    update["strategy"] = new_strategy
    if new_strategy is not Strategy.MANUAL and config.domain is Domain.BANNER:
        update["domain"] = Domain.CONTENT

    logger.debug(
        "Shelf strategy changed",
        shelf_id=config.id,
        from_strategy=config.strategy.value,
        to_strategy=new_strategy.value,
    )
    return config.model_copy(update=update)


def on_domain_change(config: ShelfConfig, new_domain: Domain) -> ShelfConfig:
    update: dict[str, Any] = {"domain": new_domain}
    if config.strategy is Strategy.MANUAL:
        # Ids are only unique within a domain
        update["selected_items"] = ()
    return config.model_copy(update=update)


def prepare_for_save(config: ShelfConfig) -> ShelfConfig:
    """Strip parameters the active strategy does not use. Idempotent."""
    update = _cleared_params(config.strategy)
    if config.see_more_url == "":
        update["see_more_url"] = None
    return config.model_copy(update=update)


def validate_shelf(config: ShelfConfig) -> list[FieldIssue]:
    """
    Check a shelf config field by field.

    Returns:
        Every issue found; an empty list means the config can be saved.
    """
    issues: list[FieldIssue] = []

    def issue(field: str, message: str) -> None:
        issues.append(FieldIssue(field=field, message=message))

    if not config.title.strip():
        issue("title", "Title is required")

    if config.see_more_url:
        try:
            _URL_ADAPTER.validate_python(config.see_more_url)
        except ValidationError:
            issue("seeMoreUrl", "Must be a valid URL")

    if config.domain is Domain.BANNER and config.strategy is not Strategy.MANUAL:
        issue("domain", "BANNER domain is only available for Manual shelves")

    if config.strategy is Strategy.MANUAL:
        if len(set(config.selected_items)) != len(config.selected_items):
            issue("selectedItems", "Selected items must not contain duplicates")
    elif config.strategy is Strategy.AUTOMATIC:
        _validate_filter(config, issue)
    elif config.strategy is Strategy.PERSONALIZED:
        if config.algorithm is None:
            issue("algorithm", "Algorithm is required for Personalized shelves")

    if config.strategy is not Strategy.MANUAL:
        if config.limit is None:
            issue("limit", "Limit is required")
        elif not LIMIT_MIN <= config.limit <= LIMIT_MAX:
            issue("limit", f"Limit must be between {LIMIT_MIN} and {LIMIT_MAX}")

    for name in _stale_fields(config):
        issue(name, f"Not used by {config.strategy.value} shelves")

    if issues:
        logger.info(
            "Shelf validation failed",
            shelf_id=config.id,
            strategy=config.strategy.value,
            fields=[i.field for i in issues],
        )
    return issues


def _validate_filter(config: ShelfConfig, issue) -> None:
    if config.filter_rule is None:
        issue("filterRule", "Filter rule is required for Automatic shelves")

    if config.filter_domain is None:
        issue("filterDomain", "Filter domain is required for Automatic shelves")
    elif config.filter_domain is Domain.BANNER:
        issue("filterDomain", "BANNER cannot be used as a filter domain")
    elif config.filter_field and config.filter_field not in domain_fields(config.filter_domain):
        issue(
            "filterField",
            f"Unknown field for {config.filter_domain.value}: {config.filter_field}",
        )

    if config.filter_value and not config.filter_field:
        issue("filterValue", "A filter value needs a filter field")


def _stale_fields(config: ShelfConfig) -> list[str]:
    stale = []
    for name, cleared in _cleared_params(config.strategy).items():
        if getattr(config, name) != cleared:
            stale.append(to_camel(name))
    return stale


def resolve(config: ShelfConfig, lookup: ContentLookup) -> tuple[ContentReference, ...]:
    """
    Ordered references a shelf should render right now.

    Lookup failures never propagate: an id that no longer resolves is
    dropped, and a failing collaborator yields an empty shelf.
    """
    try:
        if config.strategy is Strategy.MANUAL:
            return _resolve_manual(config, lookup)

        if config.limit is None:
            logger.warning("Shelf has no limit, nothing to resolve", shelf_id=config.id)
            return ()
        limit = min(max(config.limit, LIMIT_MIN), LIMIT_MAX)

        if config.strategy is Strategy.AUTOMATIC:
            if config.filter_domain is None or config.filter_rule is None:
                logger.warning("Automatic shelf missing filter", shelf_id=config.id)
                return ()
            refs = lookup.filter(
                config.filter_domain,
                config.filter_rule,
                config.filter_field,
                config.filter_value,
                limit,
            )
        else:
            if config.algorithm is None:
                logger.warning("Personalized shelf missing algorithm", shelf_id=config.id)
                return ()
            refs = lookup.by_algorithm(config.algorithm, limit)

        return tuple(refs[:limit])

    except ContentLookupError as e:
        logger.error(
            "Content lookup failed",
            shelf_id=config.id,
            strategy=config.strategy.value,
            domain=e.domain.value if e.domain else None,
            error=str(e),
        )
        return ()


def _resolve_manual(config: ShelfConfig, lookup: ContentLookup) -> tuple[ContentReference, ...]:
    if not config.selected_items:
        return ()

    found = {ref.id: ref for ref in lookup.by_ids(config.domain, config.selected_items)}
    missing = [item_id for item_id in config.selected_items if item_id not in found]
    if missing:
        logger.warning(
            "Dropping unresolvable shelf items",
            shelf_id=config.id,
            domain=config.domain.value,
            missing_ids=missing,
        )
    return tuple(found[item_id] for item_id in config.selected_items if item_id in found)


# Manual selection editing


def add_selected_item(config: ShelfConfig, ref: ContentReference) -> ShelfEdit:
    if config.strategy is not Strategy.MANUAL:
        rejection = Rejection.STRATEGY_MISMATCH
    elif ref.domain is not config.domain:
        rejection = Rejection.DOMAIN_MISMATCH
    else:
        result: EditResult[str] = ordered_list.append(config.selected_items, ref.id)
        if result.accepted:
            return ShelfEdit(config=config.model_copy(update={"selected_items": result.items}))
        rejection = result.rejection

    log_rejection("add_selected_item", rejection.value, shelf_id=config.id, item_id=ref.id)
    return ShelfEdit(config=config, rejection=rejection)


def remove_selected_item(config: ShelfConfig, item_id: str) -> ShelfConfig:
    return config.model_copy(
        update={"selected_items": ordered_list.remove(config.selected_items, item_id)}
    )


def move_selected_item(config: ShelfConfig, active_id: str, over_id: str) -> ShelfConfig:
    return config.model_copy(
        update={"selected_items": ordered_list.move(config.selected_items, active_id, over_id)}
    )
