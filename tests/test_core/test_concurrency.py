"""Concurrent access to the coordinator."""

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import pytest

from agropecuario.core.coordinator import IntegrityCoordinator
from agropecuario.core.outcome import ErrorCode


def assert_no_orphans(coordinator: IntegrityCoordinator) -> None:
    for harvest in coordinator.list_harvests():
        assert coordinator.products.exists(harvest.product_id), harvest.id


class TestConcurrency:
    def test_parallel_product_creation_yields_unique_ids(
        self, seeded: IntegrityCoordinator, make_product
    ):
        with ThreadPoolExecutor(max_workers=16) as pool:
            outcomes = list(
                pool.map(
                    lambda i: seeded.create_product(make_product(name=f"Lote {i}")),
                    range(100),
                )
            )

        ids = [o.unwrap().id for o in outcomes]
        assert len(set(ids)) == 100
        assert seeded.count_products() == 103
        assert "AGR001" not in ids

    def test_parallel_harvest_creation_on_one_product(
        self, seeded: IntegrityCoordinator, make_harvest
    ):
        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(
                pool.map(lambda _: seeded.create_harvest(make_harvest(product_id="AGR003")), range(50))
            )

        assert all(o.ok for o in outcomes)
        assert len(seeded.find_harvests_by_product("AGR003")) == 51

    def test_delete_racing_harvest_creation_leaves_no_orphans(
        self, coordinator: IntegrityCoordinator, make_product, make_harvest
    ):
        for _ in range(20):
            product = coordinator.create_product(make_product()).unwrap()

            with ThreadPoolExecutor(max_workers=2) as pool:
                deleted = pool.submit(coordinator.delete_product, product.id)
                created = pool.submit(
                    coordinator.create_harvest, make_harvest(product_id=product.id)
                )
                delete_outcome = deleted.result()
                create_outcome = created.result()

            if delete_outcome.ok:
                # Deletion won: the harvest must have been rejected
                assert not create_outcome.ok
                assert create_outcome.failure.code == ErrorCode.PRODUCT_NOT_FOUND
            else:
                # Creation won: the product is protected by its harvest
                assert create_outcome.ok
                assert delete_outcome.failure.code == ErrorCode.PRODUCT_HAS_HARVESTS

        assert_no_orphans(coordinator)


class TestInterleavedHarvestChanges:
    """Another writer changes a harvest right after the coordinator has read it."""

    @pytest.fixture
    def interleave(self, seeded: IntegrityCoordinator, monkeypatch: pytest.MonkeyPatch):
        """Run ``action`` once, just after the first ``harvests.get`` returns."""

        def install(action: Callable[[], None]) -> None:
            original_get = seeded.harvests.get
            fired = threading.Event()

            def get(harvest_id: str):
                result = original_get(harvest_id)
                if not fired.is_set():
                    fired.set()
                    action()
                return result

            monkeypatch.setattr(seeded.harvests, "get", get)

        return install

    def test_stale_update_cannot_reattach_harvest_to_deleted_product(
        self, seeded: IntegrityCoordinator, interleave, make_harvest
    ):
        def move_away_and_delete_product():
            seeded.update_harvest("COS005", make_harvest(product_id="AGR001")).unwrap()
            seeded.delete_product("AGR003").unwrap()

        interleave(move_away_and_delete_product)

        outcome = seeded.update_harvest("COS005", make_harvest(product_id="AGR003"))

        assert outcome.failure.code == ErrorCode.PRODUCT_NOT_FOUND
        assert seeded.find_harvests_by_product("AGR003") == []
        assert seeded.get_harvest("COS005").unwrap().product_id == "AGR001"
        assert_no_orphans(seeded)

    def test_update_rereads_a_harvest_changed_meanwhile(
        self, seeded: IntegrityCoordinator, interleave, make_harvest
    ):
        interleave(
            lambda: seeded.update_harvest(
                "COS001", make_harvest(product_id="AGR001", quantity=999.0)
            ).unwrap()
        )

        updated = seeded.update_harvest("COS001", make_harvest(product_id="AGR002")).unwrap()

        assert updated.product_id == "AGR002"
        assert updated.quantity == 300.0

    def test_scoped_update_rejects_harvest_moved_after_ownership_check(
        self, seeded: IntegrityCoordinator, interleave, make_harvest
    ):
        interleave(
            lambda: seeded.update_harvest("COS001", make_harvest(product_id="AGR002")).unwrap()
        )

        outcome = seeded.update_harvest_for_product("AGR001", "COS001", make_harvest())

        assert outcome.failure.code == ErrorCode.HARVEST_NOT_BELONGING_TO_PRODUCT
        assert seeded.get_harvest("COS001").unwrap().product_id == "AGR002"

    def test_scoped_delete_holds_off_a_concurrent_move(
        self, seeded: IntegrityCoordinator, monkeypatch: pytest.MonkeyPatch, make_harvest
    ):
        original_delete = seeded.harvests.delete
        results = {}

        def move_to_other_product(harvest_id: str) -> None:
            results["move"] = seeded.update_harvest(
                harvest_id, make_harvest(product_id="AGR002")
            )

        def delete(harvest_id: str):
            mover = threading.Thread(target=move_to_other_product, args=(harvest_id,))
            mover.start()
            mover.join(timeout=0.2)
            results["blocked"] = mover.is_alive()
            results["mover"] = mover
            return original_delete(harvest_id)

        monkeypatch.setattr(seeded.harvests, "delete", delete)

        removed = seeded.delete_harvest_for_product("AGR001", "COS001").unwrap()
        results["mover"].join(timeout=5)

        assert removed.product_id == "AGR001"
        assert results["blocked"] is True
        assert results["move"].failure.code == ErrorCode.HARVEST_NOT_FOUND
        assert [h.id for h in seeded.find_harvests_by_product("AGR002")] == ["COS003", "COS004"]


class TestRecreatedProduct:
    def test_recreated_id_reuses_its_lock(
        self, seeded: IntegrityCoordinator, make_product, make_harvest
    ):
        seeded.delete_harvest("COS005").unwrap()
        lock = seeded._product_locks["AGR003"]
        seeded.delete_product("AGR003").unwrap()

        seeded.create_product(make_product(id="AGR003")).unwrap()
        seeded.create_harvest(make_harvest(product_id="AGR003")).unwrap()

        assert seeded._product_locks["AGR003"] is lock
        assert seeded.delete_product("AGR003").failure.code == ErrorCode.PRODUCT_HAS_HARVESTS
        assert_no_orphans(seeded)
