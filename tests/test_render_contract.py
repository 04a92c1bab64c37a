"""
Tests for the field views handed to the page canvas.
"""
import pytest

from core.fields import FieldType, hit_test, render_fields
from core.fields.render_contract import RESIZE_HANDLE_SIZE


@pytest.fixture
def placed(page_size, store):
    page_size.set(800, 1000)
    first = store.create(FieldType.TEXT, 0, (400, 500))      # 320,480 160x40
    second = store.create(FieldType.RADIO, 0, (420, 510))    # 340,490 160x40
    other_page = store.create(FieldType.DATE, 1, (100, 100))
    return first, second, other_page


class TestRenderFields:

    def test_views_for_page(self, store, transform, placed):
        first, second, _ = placed
        views = render_fields(store, transform, 0)
        assert [v.id for v in views] == [first.id, second.id]
        assert views[0].rect.origin == pytest.approx((320, 480))
        assert views[0].color == "#3B82F6"
        assert views[1].label == "Radio"

    def test_selection_flag(self, store, transform, placed):
        first, second, _ = placed
        views = render_fields(store, transform, 0)
        assert [v.selected for v in views] == [False, True]
        store.select(first.id)
        views = render_fields(store, transform, 0)
        assert [v.selected for v in views] == [True, False]

    def test_value_and_checked_exposed(self, store, transform, placed):
        first, second, _ = placed
        store.update(first.id, value="hello")
        store.update(second.id, checked=True)
        views = {v.id: v for v in render_fields(store, transform, 0)}
        assert views[first.id].value == "hello"
        assert views[second.id].checked is True

    def test_empty_while_geometry_unknown(self, page_size, store, transform, placed):
        page_size.unknown()
        assert render_fields(store, transform, 0) == []

    def test_resize_handle_in_bottom_right_corner(self, store, transform, placed):
        view = render_fields(store, transform, 0)[0]
        handle = view.resize_handle
        assert handle.right == pytest.approx(view.rect.right)
        assert handle.bottom == pytest.approx(view.rect.bottom)
        assert handle.width == RESIZE_HANDLE_SIZE


class TestHitTest:

    def test_topmost_field_wins(self, store, transform, placed):
        _, second, _ = placed
        views = render_fields(store, transform, 0)
        view, on_handle = hit_test(views, 350, 500)  # overlap of both
        assert view.id == second.id
        assert on_handle is False

    def test_handle(self, store, transform, placed):
        first, _, _ = placed
        views = render_fields(store, transform, 0)
        # First field's corner, outside the second field
        view, on_handle = hit_test(views[:1], 478, 518)
        assert view.id == first.id
        assert on_handle is True

    def test_miss(self, store, transform, placed):
        views = render_fields(store, transform, 0)
        assert hit_test(views, 5, 5) == (None, False)
