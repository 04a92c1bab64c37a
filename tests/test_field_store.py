"""
Tests for FieldStore commands and queries.
"""
import pytest

from core.fields import FieldType, NormalizedRect


class TestCreate:

    def test_default_geometry_centred_on_drop(self, page_size, store, transform):
        page_size.set(800, 1000)
        field = store.create(FieldType.TEXT, 0, (400, 500))

        assert field is not None
        assert field.coordinate.x_rel == pytest.approx(0.4)
        assert field.coordinate.y_rel == pytest.approx(0.48)
        assert field.coordinate.w_rel == pytest.approx(0.2)
        assert field.coordinate.h_rel == pytest.approx(0.04)

        rect = transform.normalized_to_pixel(field.coordinate)
        assert rect.origin == pytest.approx((320, 480))
        assert rect.size == pytest.approx((160, 40))

    def test_new_field_is_selected(self, page_size, store):
        page_size.set(800, 1000)
        field = store.create(FieldType.TEXT, 0, (400, 500))
        assert store.selected_id == field.id
        assert store.selected_field == field

    def test_defaults(self, store):
        field = store.create(FieldType.RADIO, 2, (100, 100))
        assert field.value == ""
        assert field.checked is False
        assert field.page_index == 2
        assert field.field_type is FieldType.RADIO

    def test_unknown_page_size_creates_nothing(self, page_size, store):
        page_size.unknown()
        assert store.create(FieldType.SIGNATURE, 0, (10, 10)) is None
        assert len(store) == 0
        assert store.selected_id is None

    def test_ids_are_unique(self, store):
        ids = {store.create(FieldType.DATE, 0, (50, 50)).id for _ in range(5)}
        assert len(ids) == 5

    def test_default_ids_are_random(self, transform):
        from core.fields import FieldStore
        plain = FieldStore(transform)
        a = plain.create(FieldType.TEXT, 0, (10, 10))
        b = plain.create(FieldType.TEXT, 0, (10, 10))
        assert a.id != b.id


class TestQueries:

    def test_by_page_keeps_insertion_order(self, store):
        first = store.create(FieldType.TEXT, 0, (10, 10))
        store.create(FieldType.TEXT, 1, (10, 10))
        third = store.create(FieldType.DATE, 0, (20, 20))
        assert [f.id for f in store.by_page(0)] == [first.id, third.id]
        assert store.by_page(5) == []

    def test_has_field_of_type(self, store):
        store.create(FieldType.TEXT, 0, (10, 10))
        assert store.has_field_of_type(FieldType.TEXT)
        assert not store.has_field_of_type(FieldType.SIGNATURE)

    def test_contains_and_get(self, store):
        field = store.create(FieldType.TEXT, 0, (10, 10))
        assert field.id in store
        assert "missing" not in store
        assert store.get("missing") is None


class TestUpdate:

    def test_merges_value(self, store):
        field = store.create(FieldType.TEXT, 0, (10, 10))
        store.update(field.id, value="Jane Doe")
        updated = store.get(field.id)
        assert updated.value == "Jane Doe"
        assert updated.coordinate == field.coordinate

    def test_merges_checked(self, store):
        field = store.create(FieldType.RADIO, 0, (10, 10))
        store.update(field.id, checked=True)
        assert store.get(field.id).checked is True

    def test_merges_coordinate(self, store):
        field = store.create(FieldType.TEXT, 0, (10, 10))
        coordinate = NormalizedRect(0.1, 0.2, 0.3, 0.4)
        store.update(field.id, coordinate=coordinate)
        assert store.get(field.id).coordinate == coordinate

    def test_rejects_non_rect_coordinate(self, store):
        field = store.create(FieldType.TEXT, 0, (10, 10))
        with pytest.raises(TypeError):
            store.update(field.id, coordinate=(0.1, 0.2, 0.3, 0.4))

    def test_unknown_id_is_ignored(self, store):
        store.create(FieldType.TEXT, 0, (10, 10))
        before = store.fields
        store.update("missing", value="x")
        assert store.fields == before

    def test_fields_snapshot_is_immutable(self, store):
        store.create(FieldType.TEXT, 0, (10, 10))
        snapshot = store.fields
        store.create(FieldType.TEXT, 0, (10, 10))
        assert len(snapshot) == 1
        assert len(store.fields) == 2


class TestDeleteAndSelect:

    def test_deleting_selected_clears_selection(self, store):
        field = store.create(FieldType.TEXT, 0, (10, 10))
        assert store.delete(field.id) is True
        assert store.selected_id is None
        assert len(store) == 0

    def test_deleting_unselected_keeps_selection(self, store):
        first = store.create(FieldType.TEXT, 0, (10, 10))
        second = store.create(FieldType.TEXT, 0, (50, 50))
        assert store.selected_id == second.id
        store.delete(first.id)
        assert store.selected_id == second.id

    def test_delete_unknown(self, store):
        assert store.delete("missing") is False

    def test_select_and_clear(self, store):
        first = store.create(FieldType.TEXT, 0, (10, 10))
        store.create(FieldType.TEXT, 0, (50, 50))
        store.select(first.id)
        assert store.selected_id == first.id
        store.select(None)
        assert store.selected_id is None

    def test_select_unknown_is_ignored(self, store):
        field = store.create(FieldType.TEXT, 0, (10, 10))
        store.select("missing")
        assert store.selected_id == field.id

    def test_clear(self, store):
        store.create(FieldType.TEXT, 0, (10, 10))
        store.clear()
        assert len(store) == 0
        assert store.selected_id is None
