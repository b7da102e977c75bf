"""
Domain subpackage for shelf composition.
"""

from .models import (
    LIMIT_MAX,
    LIMIT_MIN,
    Algorithm,
    ContentKind,
    ContentReference,
    Domain,
    EditResult,
    FieldIssue,
    FilterRule,
    PageConfig,
    PageEdit,
    PageName,
    PageShelf,
    Rejection,
    ScheduledContent,
    ShelfConfig,
    ShelfEdit,
    ShelfLayout,
    ShelfRef,
    Strategy,
)

__all__ = [
    "LIMIT_MAX",
    "LIMIT_MIN",
    "Algorithm",
    "ContentKind",
    "ContentReference",
    "Domain",
    "EditResult",
    "FieldIssue",
    "FilterRule",
    "PageConfig",
    "PageEdit",
    "PageName",
    "PageShelf",
    "Rejection",
    "ScheduledContent",
    "ShelfConfig",
    "ShelfEdit",
    "ShelfLayout",
    "ShelfRef",
    "Strategy",
]
