from app.features.shelf_composition.domain.models import (
    PageConfig,
    PageName,
    PageShelf,
    Rejection,
    ShelfRef,
)
from app.features.shelf_composition.services import page_composition


def _page() -> PageConfig:
    return PageConfig(
        id="home-page",
        name=PageName.HOME,
        shelves=(
            PageShelf(id="ps-1", shelf_id="s1", shelf_title="Trending Now", order=0),
            PageShelf(id="ps-2", shelf_id="s2", shelf_title="Featured Collections", order=1),
        ),
    )


def _orders(page: PageConfig) -> list[int]:
    return [entry.order for entry in page.shelves]


def test_adding_shelf_twice_is_rejected():
    page = _page()

    edit = page_composition.add_shelf(page, ShelfRef(id="s1", title="Trending Now"))

    assert edit.rejection == Rejection.DUPLICATE_SHELF
    assert edit.page == page


def test_add_shelf_appends_at_end():
    edit = page_composition.add_shelf(_page(), ShelfRef(id="s3", title="Latest News"))

    assert edit.accepted
    added = edit.page.shelves[-1]
    assert added.shelf_id == "s3"
    assert added.shelf_title == "Latest News"
    assert added.order == 2
    assert added.id.startswith("page-shelf-")


def test_remove_shelf_reindexes():
    page = page_composition.add_shelf(_page(), ShelfRef(id="s3", title="Latest News")).page

    updated = page_composition.remove_shelf(page, "ps-1")

    assert [entry.shelf_id for entry in updated.shelves] == ["s2", "s3"]
    assert _orders(updated) == [0, 1]


def test_reorder_moves_and_reindexes():
    page = page_composition.add_shelf(_page(), ShelfRef(id="s3", title="Latest News")).page
    newest = page.shelves[-1].id

    updated = page_composition.reorder(page, newest, "ps-1")

    assert [entry.shelf_id for entry in updated.shelves] == ["s3", "s1", "s2"]
    assert _orders(updated) == [0, 1, 2]


def test_reorder_unknown_id_leaves_page_alone():
    page = _page()
    assert page_composition.reorder(page, "ps-1", "missing") == page


def test_check_page_reports_duplicates_and_gaps():
    page = PageConfig(
        id="p",
        name=PageName.NEWS,
        shelves=(
            PageShelf(id="a", shelf_id="s1", shelf_title="One", order=0),
            PageShelf(id="b", shelf_id="s1", shelf_title="One again", order=2),
        ),
    )

    messages = [issue.message for issue in page_composition.check_page(page)]

    assert len(messages) == 2
    assert "s1" in messages[0]


def test_normalize_page_sorts_by_stored_order():
    page = PageConfig(
        id="p",
        name=PageName.CONTENT,
        shelves=(
            PageShelf(id="b", shelf_id="s2", shelf_title="Two", order=7),
            PageShelf(id="a", shelf_id="s1", shelf_title="One", order=3),
        ),
    )

    normalized = page_composition.normalize_page(page)

    assert [entry.id for entry in normalized.shelves] == ["a", "b"]
    assert page_composition.check_page(normalized) == []
