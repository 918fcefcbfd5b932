"""Tests for ProductStore."""

import dataclasses
from datetime import datetime

import pytest

from agropecuario.core.ids import EntityKind, IdGenerator
from agropecuario.core.outcome import ErrorCategory, ErrorCode
from agropecuario.core.product_store import ProductStore


class TestProductStoreCrud:
    """Create/get/list/update/delete behaviour."""

    def test_create_assigns_sequential_ids(self, product_store: ProductStore, make_product):
        first = product_store.create(make_product()).unwrap()
        second = product_store.create(make_product()).unwrap()

        assert first.id == "AGR001"
        assert second.id == "AGR002"

    def test_create_stamps_creation_time(self, product_store: ProductStore, make_product):
        product = product_store.create(make_product()).unwrap()

        assert product.created_at == datetime(2025, 1, 15, 10, 30, 0)
        assert product.updated_at is None

    def test_create_returns_a_new_instance(self, product_store: ProductStore, make_product):
        original = make_product()
        stored = product_store.create(original).unwrap()

        assert stored is not original
        assert original.id is None

    def test_stored_products_are_immutable(self, product_store: ProductStore, make_product):
        stored = product_store.create(make_product()).unwrap()

        with pytest.raises(dataclasses.FrozenInstanceError):
            stored.name = "changed"  # type: ignore[misc]

    def test_create_with_supplied_id(self, product_store: ProductStore, make_product):
        product = product_store.create(make_product(id="FINCA-01")).unwrap()

        assert product.id == "FINCA-01"
        assert product_store.get("FINCA-01") == product

    def test_create_rejects_duplicate_id(self, product_store: ProductStore, make_product):
        product_store.create(make_product(id="AGR001"))
        outcome = product_store.create(make_product(id="AGR001", name="Otro"))

        assert not outcome.ok
        assert outcome.failure.category == ErrorCategory.ALREADY_EXISTS
        assert outcome.failure.code == ErrorCode.PRODUCT_ALREADY_EXISTS
        assert product_store.count() == 1
        assert product_store.get("AGR001").name == "Cacao Fino"

    def test_supplied_id_is_never_generated_again(
        self,
        product_store: ProductStore,
        id_generator: IdGenerator,
        make_product,
    ):
        product_store.create(make_product(id="AGR005"))
        generated = product_store.create(make_product()).unwrap()

        assert generated.id == "AGR006"
        assert id_generator.current(EntityKind.PRODUCT) == 6

    def test_get_missing_returns_none(self, product_store: ProductStore):
        assert product_store.get("AGR999") is None

    def test_list_keeps_insertion_order(self, product_store: ProductStore, make_product):
        for name in ["Uno", "Dos", "Tres"]:
            product_store.create(make_product(name=name))

        assert [p.name for p in product_store.list()] == ["Uno", "Dos", "Tres"]

    def test_list_is_a_snapshot(self, product_store: ProductStore, make_product):
        product_store.create(make_product())
        snapshot = product_store.list()
        product_store.create(make_product())

        assert len(snapshot) == 1
        assert product_store.count() == 2

    def test_update_replaces_fields_and_keeps_identity(
        self, product_store: ProductStore, make_product
    ):
        created = product_store.create(make_product()).unwrap()

        updated = product_store.update(
            created.id,
            make_product(id="IGNORED", name="Cacao Renovado", sale_price=9500.0),
        ).unwrap()

        assert updated.id == created.id
        assert updated.name == "Cacao Renovado"
        assert updated.sale_price == 9500.0
        assert updated.created_at == created.created_at
        assert updated.updated_at == datetime(2025, 1, 15, 10, 30, 0)
        assert product_store.get("IGNORED") is None

    def test_update_missing_fails(self, product_store: ProductStore, make_product):
        outcome = product_store.update("AGR404", make_product())

        assert outcome.failure.code == ErrorCode.PRODUCT_NOT_FOUND
        assert outcome.failure.category == ErrorCategory.NOT_FOUND
        assert product_store.count() == 0

    def test_delete_removes_entry(self, product_store: ProductStore, make_product):
        created = product_store.create(make_product()).unwrap()

        removed = product_store.delete(created.id).unwrap()

        assert removed == created
        assert product_store.get(created.id) is None
        assert product_store.count() == 0

    def test_delete_missing_fails(self, product_store: ProductStore):
        outcome = product_store.delete("AGR404")

        assert outcome.failure.code == ErrorCode.PRODUCT_NOT_FOUND

    def test_deleted_id_is_not_reused(self, product_store: ProductStore, make_product):
        created = product_store.create(make_product()).unwrap()
        product_store.delete(created.id)

        assert product_store.create(make_product()).unwrap().id == "AGR002"


class TestProductStoreSearch:
    """Search predicates."""

    @pytest.fixture
    def store(self, product_store: ProductStore, make_product) -> ProductStore:
        product_store.create(make_product(name="Café Especial", crop_type="Café", season="All year", cultivated_hectares=10.0))
        product_store.create(make_product(name="Arroz Blanco", crop_type="Cereal", season="Rainy", cultivated_hectares=25.5))
        product_store.create(make_product(name="Maíz Amarillo", crop_type="Cereal", season="Dry", cultivated_hectares=5.0))
        product_store.create(make_product(name="Café Orgánico", crop_type="café", season="rainy", cultivated_hectares=4.99))
        return product_store

    def test_find_by_crop_type_is_case_insensitive_exact(self, store: ProductStore):
        names = {p.name for p in store.find_by_crop_type("CAFÉ")}
        assert names == {"Café Especial", "Café Orgánico"}

    def test_find_by_crop_type_does_not_match_fragments(self, store: ProductStore):
        assert store.find_by_crop_type("Cer") == []

    def test_find_by_name_matches_substring(self, store: ProductStore):
        names = [p.name for p in store.find_by_name("café")]
        assert names == ["Café Especial", "Café Orgánico"]

    def test_find_by_season(self, store: ProductStore):
        names = {p.name for p in store.find_by_season("Rainy")}
        assert names == {"Arroz Blanco", "Café Orgánico"}

    def test_hectare_range_is_inclusive(self, store: ProductStore):
        hectares = sorted(p.cultivated_hectares for p in store.find_by_hectare_range(5.0, 10.0))
        assert hectares == [5.0, 10.0]

    def test_hectare_range_min_only(self, store: ProductStore):
        hectares = sorted(p.cultivated_hectares for p in store.find_by_hectare_range(min_hectares=10.0))
        assert hectares == [10.0, 25.5]

    def test_hectare_range_max_only(self, store: ProductStore):
        hectares = sorted(p.cultivated_hectares for p in store.find_by_hectare_range(max_hectares=5.0))
        assert hectares == [4.99, 5.0]

    def test_hectare_range_without_bounds_returns_all(self, store: ProductStore):
        assert len(store.find_by_hectare_range()) == store.count() == 4

    def test_no_matches_returns_empty_list(self, store: ProductStore):
        assert store.find_by_name("Aguacate") == []
