"""
Page composition: the ordered shelves shown on one page.

A shelf may appear at most once per page and ``order`` always runs
0..n-1 after any edit.
"""

from __future__ import annotations

import uuid

from app.features.shelf_composition.domain.models import (
    FieldIssue,
    PageConfig,
    PageEdit,
    PageShelf,
    Rejection,
    ShelfRef,
)
from app.features.shelf_composition.services import ordered_list
from app.infrastructure.observability.logging import get_logger, log_rejection

logger = get_logger(__name__)


def _shelf_key(entry: PageShelf) -> str:
    return entry.shelf_id


def new_page_shelf_id() -> str:
    return f"page-shelf-{uuid.uuid4().hex}"


def add_shelf(page: PageConfig, shelf: ShelfRef) -> PageEdit:
    """Append ``shelf`` to the end of the page unless it is already on it."""
    entry = PageShelf(
        id=new_page_shelf_id(),
        shelf_id=shelf.id,
        shelf_title=shelf.title,
        order=len(page.shelves),
    )
    result = ordered_list.append(page.shelves, entry, key=_shelf_key)
    if not result.accepted:
        log_rejection("add_shelf", Rejection.DUPLICATE_SHELF.value, page_id=page.id, shelf_id=shelf.id)
        return PageEdit(page=page, rejection=Rejection.DUPLICATE_SHELF)

    logger.debug("Shelf added to page", page_id=page.id, shelf_id=shelf.id, order=entry.order)
    return PageEdit(page=_with_shelves(page, result.items))


def remove_shelf(page: PageConfig, page_shelf_id: str) -> PageConfig:
    return _with_shelves(page, ordered_list.remove(page.shelves, page_shelf_id))


def reorder(page: PageConfig, active_id: str, over_id: str) -> PageConfig:
    return _with_shelves(page, ordered_list.move(page.shelves, active_id, over_id))


def normalize_page(page: PageConfig) -> PageConfig:
    """Sort entries by stored ``order`` and rewrite it as 0..n-1."""
    return _with_shelves(page, sorted(page.shelves, key=lambda entry: entry.order))


def check_page(page: PageConfig) -> list[FieldIssue]:
    """Report invariant violations in a page loaded from storage."""
    issues = []

    seen: set[str] = set()
    for entry in page.shelves:
        if entry.shelf_id in seen:
            issues.append(FieldIssue(field="shelves", message=f"Shelf {entry.shelf_id} appears more than once"))
        seen.add(entry.shelf_id)

    orders = sorted(entry.order for entry in page.shelves)
    if orders != list(range(len(page.shelves))):
        issues.append(FieldIssue(field="shelves", message="Shelf order must run 0..n-1 without gaps"))

    return issues


def _with_shelves(page: PageConfig, shelves) -> PageConfig:
    return page.model_copy(update={"shelves": ordered_list.reindex(shelves)})
