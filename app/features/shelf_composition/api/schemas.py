"""
Request/response models for the composition API.

Bodies are camelCase JSON, matching the shelf and page shapes the admin
UI already binds to.
"""

from datetime import datetime

from pydantic import Field

from app.features.shelf_composition.domain.models import (
    CompositionModel,
    ContentReference,
    Domain,
    FieldIssue,
    PageConfig,
    Rejection,
    ScheduledContent,
    ShelfConfig,
    ShelfRef,
    Strategy,
)
from app.features.shelf_composition.services.scheduling import ScheduleState


# Shelf requests
class NewShelfRequest(CompositionModel):
    id: str = Field(..., min_length=1)
    title: str = ""
    strategy: Strategy = Strategy.MANUAL
    domain: Domain = Domain.CONTENT


class StrategyChangeRequest(CompositionModel):
    config: ShelfConfig
    strategy: Strategy


class DomainChangeRequest(CompositionModel):
    config: ShelfConfig
    domain: Domain


class AddItemRequest(CompositionModel):
    config: ShelfConfig
    item: ContentReference


class RemoveItemRequest(CompositionModel):
    config: ShelfConfig
    item_id: str


class MoveRequest(CompositionModel):
    active_id: str
    over_id: str


class MoveItemRequest(MoveRequest):
    config: ShelfConfig


# Page requests
class AddPageShelfRequest(CompositionModel):
    page: PageConfig
    shelf: ShelfRef


class RemovePageShelfRequest(CompositionModel):
    page: PageConfig
    page_shelf_id: str


class ReorderPageRequest(MoveRequest):
    page: PageConfig


# Schedule requests
class ScheduleEvaluateRequest(CompositionModel):
    enabled: bool
    schedule_date: datetime | None = None


class ScheduleToggleRequest(CompositionModel):
    entity: ScheduledContent
    enabled: bool


# Responses
class ValidationResponse(CompositionModel):
    valid: bool
    issues: list[FieldIssue]


class ResolveResponse(CompositionModel):
    shelf_id: str
    items: list[ContentReference]


class ShelfEditResponse(CompositionModel):
    accepted: bool
    reason: Rejection | None = None
    config: ShelfConfig


class PageEditResponse(CompositionModel):
    accepted: bool
    reason: Rejection | None = None
    page: PageConfig
    issues: list[FieldIssue] = []


class ScheduleStatusResponse(CompositionModel):
    state: ScheduleState
    effective_enabled: bool
    editable: bool
    hint: str


class ScheduleToggleResponse(CompositionModel):
    accepted: bool
    reason: Rejection | None = None
    entity: ScheduledContent
    status: ScheduleStatusResponse


__all__ = [
    "AddItemRequest",
    "AddPageShelfRequest",
    "DomainChangeRequest",
    "MoveItemRequest",
    "NewShelfRequest",
    "PageEditResponse",
    "RemoveItemRequest",
    "RemovePageShelfRequest",
    "ReorderPageRequest",
    "ResolveResponse",
    "ScheduleEvaluateRequest",
    "ScheduleStatusResponse",
    "ScheduleToggleRequest",
    "ScheduleToggleResponse",
    "ShelfEditResponse",
    "StrategyChangeRequest",
    "ValidationResponse",
]
