"""
Domain models for shelf and page composition.

Every shape here is an immutable pydantic model: services never mutate
an instance, they return a copy built with ``model_copy``. Attribute
names are snake_case in Python and camelCase on the wire, which is the
contract the admin UI and the persistence layer bind to.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

LIMIT_MIN = 1
LIMIT_MAX = 100

T = TypeVar("T")


class Domain(str, Enum):
    CONTENT = "CONTENT"
    COLLECTION = "COLLECTION"
    NEWS = "NEWS"
    AGENT = "AGENT"
    GROUP = "GROUP"
    AGENDA = "AGENDA"
    BANNER = "BANNER"  # Manual shelves only


class Strategy(str, Enum):
    MANUAL = "MANUAL"
    AUTOMATIC = "AUTOMATIC"
    PERSONALIZED = "PERSONALIZED"


class FilterRule(str, Enum):
    RANDOM = "RANDOM"
    RECENT = "RECENT"
    ALPHABETICAL = "ALPHABETICAL"
    TOP = "TOP"


class Algorithm(str, Enum):
    BECAUSE_YOU_WATCHED = "BECAUSE_YOU_WATCHED"
    SUGGESTIONS_FOR_YOU = "SUGGESTIONS_FOR_YOU"


class ShelfLayout(str, Enum):
    CAROUSEL = "CAROUSEL"
    LIST = "LIST"
    HERO_BANNER = "HERO_BANNER"
    MID_BANNER = "MID_BANNER"
    AD_BANNER = "AD_BANNER"
    GRID = "GRID"


class PageName(str, Enum):
    HOME = "home"
    CONTENT = "content"
    NEWS = "news"
    ARTICLE_DETAILS = "article details"
    AGENT_DETAILS = "agent details"
    GROUP_DETAILS = "group details"


class ContentKind(str, Enum):
    VIDEO = "VIDEO"
    NEWS = "NEWS"
    LIVE = "LIVE"


class Rejection(str, Enum):
    """Why an edit was refused. The input is always returned unchanged."""

    DUPLICATE_ITEM = "DUPLICATE_ITEM"
    DUPLICATE_SHELF = "DUPLICATE_SHELF"
    DOMAIN_MISMATCH = "DOMAIN_MISMATCH"
    STRATEGY_MISMATCH = "STRATEGY_MISMATCH"
    SCHEDULE_LOCKED = "SCHEDULE_LOCKED"


class CompositionModel(BaseModel):
    """Base for every composition shape: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ContentReference(CompositionModel):
    """One selectable item. Only ``id`` and ``domain`` carry identity."""

    id: str
    domain: Domain
    title: str
    thumbnail: str | None = None


class ShelfConfig(CompositionModel):
    """A shelf and its selection strategy parameters.

    Range and placement rules (limit bounds, BANNER outside Manual) are
    not enforced here; ``validate_shelf`` reports them per field.
    """

    id: str
    title: str = ""
    strategy: Strategy = Strategy.MANUAL
    layout: ShelfLayout = ShelfLayout.CAROUSEL
    domain: Domain = Domain.CONTENT
    has_see_more: bool = False
    see_more_url: str | None = None

    # Manual
    selected_items: tuple[str, ...] = ()

    # Automatic
    filter_domain: Domain | None = None
    filter_rule: FilterRule | None = None
    filter_field: str | None = None
    filter_value: str | None = None

    # Personalized
    algorithm: Algorithm | None = None

    # Automatic + Personalized
    limit: int | None = None

    enabled: bool = True
    schedule_date: datetime | None = None


class PageShelf(CompositionModel):
    id: str
    shelf_id: str
    shelf_title: str
    order: int


class PageConfig(CompositionModel):
    id: str
    name: PageName
    shelves: tuple[PageShelf, ...] = ()


class ScheduledContent(CompositionModel):
    """Schedulable view of a standalone video, news item or live stream."""

    id: str
    kind: ContentKind
    title: str = ""
    enabled: bool = True
    schedule_date: datetime | None = None


class FieldIssue(CompositionModel):
    field: str
    message: str


class ShelfRef(CompositionModel):
    """Minimal shelf identity needed to place a shelf on a page."""

    id: str
    title: str = Field(default="", description="Display title copied onto the page entry")


@dataclass(slots=True, frozen=True)
class EditResult(Generic[T]):
    """Outcome of a sequence edit: the resulting items and any rejection."""

    items: tuple[T, ...]
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


@dataclass(slots=True, frozen=True)
class ShelfEdit:
    config: ShelfConfig
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None


@dataclass(slots=True, frozen=True)
class PageEdit:
    page: PageConfig
    rejection: Rejection | None = None

    @property
    def accepted(self) -> bool:
        return self.rejection is None
