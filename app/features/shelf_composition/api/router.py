"""
Shelf composition routes.

Every endpoint is a pure transformation: the caller sends the current
shelf or page, gets the edited copy back, and persists it itself.
Rejected edits are ordinary 200 responses with ``accepted: false`` and
the input returned unchanged; only malformed bodies produce a 422.

Usage:
    1. POST /composition/shelves/strategy - Switch strategy, dropping stale params
    2. POST /composition/shelves/items/move - Apply a drag-and-drop move
    3. POST /composition/pages/shelves/add - Place a shelf on a page
    4. POST /composition/schedule/evaluate - Effective enabled state
"""

from fastapi import APIRouter, Depends

from app.features.shelf_composition.domain.models import PageConfig, PageEdit, ShelfConfig, ShelfEdit
from app.features.shelf_composition.lookup.base import ContentLookup
from app.features.shelf_composition.services import page_composition, scheduling, strategy
from app.features.shelf_composition.services.scheduling import Clock, ScheduleStatus
from app.infrastructure.observability.logging import get_logger

from .dependencies import get_clock, get_content_lookup
from .schemas import (
    AddItemRequest,
    AddPageShelfRequest,
    DomainChangeRequest,
    MoveItemRequest,
    NewShelfRequest,
    PageEditResponse,
    RemoveItemRequest,
    RemovePageShelfRequest,
    ReorderPageRequest,
    ResolveResponse,
    ScheduleEvaluateRequest,
    ScheduleStatusResponse,
    ScheduleToggleRequest,
    ScheduleToggleResponse,
    ShelfEditResponse,
    StrategyChangeRequest,
    ValidationResponse,
)

router = APIRouter(prefix="/composition", tags=["composition"])
logger = get_logger(__name__)


def _shelf_response(edit: ShelfEdit) -> ShelfEditResponse:
    return ShelfEditResponse(accepted=edit.accepted, reason=edit.rejection, config=edit.config)


def _page_response(edit: PageEdit) -> PageEditResponse:
    return PageEditResponse(
        accepted=edit.accepted,
        reason=edit.rejection,
        page=edit.page,
        issues=page_composition.check_page(edit.page),
    )


def _status_response(status: ScheduleStatus) -> ScheduleStatusResponse:
    return ScheduleStatusResponse(
        state=status.state,
        effective_enabled=status.effective_enabled,
        editable=status.editable,
        hint=status.hint,
    )


# Shelves


@router.post("/shelves/new", response_model=ShelfConfig)
def new_shelf(request: NewShelfRequest):
    """Blank shelf with editor defaults for the requested strategy."""
    return strategy.new_shelf_config(request.id, request.title, request.strategy, request.domain)


@router.post("/shelves/strategy", response_model=ShelfConfig)
def change_strategy(request: StrategyChangeRequest):
    return strategy.on_strategy_change(request.config, request.strategy)


@router.post("/shelves/domain", response_model=ShelfConfig)
def change_domain(request: DomainChangeRequest):
    return strategy.on_domain_change(request.config, request.domain)


@router.post("/shelves/validate", response_model=ValidationResponse)
def validate_shelf(config: ShelfConfig):
    issues = strategy.validate_shelf(config)
    return ValidationResponse(valid=not issues, issues=issues)


@router.post("/shelves/prepare", response_model=ShelfConfig)
def prepare_shelf(config: ShelfConfig):
    """Config as it should be persisted: inactive strategy params stripped."""
    return strategy.prepare_for_save(config)


@router.post("/shelves/resolve", response_model=ResolveResponse)
def resolve_shelf(config: ShelfConfig, lookup: ContentLookup = Depends(get_content_lookup)):
    """
    Ordered items the shelf renders right now.

    Ids the lookup no longer knows are dropped; a failing lookup yields
    an empty list rather than an error.
    """
    items = strategy.resolve(config, lookup)
    logger.info(
        "Shelf resolved",
        shelf_id=config.id,
        strategy=config.strategy.value,
        item_count=len(items),
    )
    return ResolveResponse(shelf_id=config.id, items=list(items))


@router.post("/shelves/items/add", response_model=ShelfEditResponse)
def add_item(request: AddItemRequest):
    return _shelf_response(strategy.add_selected_item(request.config, request.item))


@router.post("/shelves/items/remove", response_model=ShelfEditResponse)
def remove_item(request: RemoveItemRequest):
    config = strategy.remove_selected_item(request.config, request.item_id)
    return _shelf_response(ShelfEdit(config=config))


@router.post("/shelves/items/move", response_model=ShelfEditResponse)
def move_item(request: MoveItemRequest):
    config = strategy.move_selected_item(request.config, request.active_id, request.over_id)
    return _shelf_response(ShelfEdit(config=config))


# Pages


@router.post("/pages/shelves/add", response_model=PageEditResponse)
def add_page_shelf(request: AddPageShelfRequest):
    return _page_response(page_composition.add_shelf(request.page, request.shelf))


@router.post("/pages/shelves/remove", response_model=PageEditResponse)
def remove_page_shelf(request: RemovePageShelfRequest):
    page = page_composition.remove_shelf(request.page, request.page_shelf_id)
    return _page_response(PageEdit(page=page))


@router.post("/pages/shelves/reorder", response_model=PageEditResponse)
def reorder_page_shelves(request: ReorderPageRequest):
    page = page_composition.reorder(request.page, request.active_id, request.over_id)
    return _page_response(PageEdit(page=page))


@router.post("/pages/validate", response_model=ValidationResponse)
def validate_page(page: PageConfig):
    issues = page_composition.check_page(page)
    return ValidationResponse(valid=not issues, issues=issues)


# Scheduling


@router.post("/schedule/evaluate", response_model=ScheduleStatusResponse)
def evaluate_schedule(request: ScheduleEvaluateRequest, clock: Clock = Depends(get_clock)):
    return _status_response(scheduling.evaluate(request, clock.now()))


@router.post("/schedule/toggle", response_model=ScheduleToggleResponse)
def toggle_enabled(request: ScheduleToggleRequest, clock: Clock = Depends(get_clock)):
    """Flip ``enabled`` on a video, news item or live stream, honouring its schedule."""
    now = clock.now()
    result = scheduling.set_enabled(request.entity, request.enabled, now)
    return ScheduleToggleResponse(
        accepted=result.accepted,
        reason=result.rejection,
        entity=result.entity,
        status=_status_response(scheduling.evaluate(result.entity, now)),
    )
