"""Integrity coordinator - the service layer over both stores.

Enforces the master-detail contract between products and harvests:

- a harvest can only be created or moved onto an existing product
- a product with harvests cannot be deleted (rejected, never cascaded)
- nested access never returns a harvest that belongs to another product

Check-then-act sequences that span both stores run under per-product locks.
Anything that puts a harvest on a product holds that product's lock and
re-checks that it exists; anything that takes a harvest away from a product
(a move, a scoped delete) also holds the lock of the product it leaves.
Multiple locks are always acquired in id order.
"""

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from dataclasses import replace

from agropecuario.core import metrics
from agropecuario.core.clock import Clock
from agropecuario.core.entities import Harvest, Product, ProductStatistics
from agropecuario.core.harvest_store import HarvestStore
from agropecuario.core.outcome import (
    Outcome,
    harvest_not_belonging_to_product,
    harvest_not_found,
    invalid_fields,
    product_has_harvests,
    product_not_found,
    unresolved_product_reference,
)
from agropecuario.core.product_store import ProductStore
from agropecuario.core.validation import validate_harvest, validate_product
from agropecuario.infra.logging import get_logger

logger = get_logger(__name__)


class IntegrityCoordinator:
    """Entry point for every product and harvest operation.

    Returns ``Outcome`` values; store failures are passed through or mapped
    to a more specific failure, never dropped.
    """

    def __init__(
        self,
        products: ProductStore,
        harvests: HarvestStore,
        clock: Clock,
    ) -> None:
        self.products = products
        self.harvests = harvests
        self._clock = clock
        self._product_locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _product_lock(self, product_id: str) -> Iterator[None]:
        # Kept after the product is deleted: a supplied id can bring it back,
        # and it must map to the same lock.
        with self._locks_guard:
            lock = self._product_locks.setdefault(product_id, threading.Lock())
        with lock:
            yield

    @contextmanager
    def _product_locks_held(self, *product_ids: str) -> Iterator[None]:
        with ExitStack() as stack:
            for product_id in sorted(set(product_ids)):
                stack.enter_context(self._product_lock(product_id))
            yield

    # =========================================================================
    # Products
    # =========================================================================

    def create_product(self, product: Product) -> Outcome[Product]:
        if product.production_date is None:
            product = replace(product, production_date=self._clock())

        violations = validate_product(product)
        if violations:
            logger.info(
                "Product rejected",
                reason="validation",
                fields=[v.field for v in violations],
            )
            return Outcome.fail(invalid_fields("producto", violations))

        outcome = self.products.create(product)
        if outcome.ok:
            logger.info("Product created", product_id=outcome.value.id)
        return outcome

    def get_product(self, product_id: str) -> Outcome[Product]:
        product = self.products.get(product_id)
        if product is None:
            return Outcome.fail(product_not_found(product_id))
        return Outcome.success(product)

    def list_products(self) -> list[Product]:
        return self.products.list()

    def find_products_by_crop_type(self, crop_type: str) -> list[Product]:
        return self.products.find_by_crop_type(crop_type)

    def find_products_by_name(self, name: str) -> list[Product]:
        return self.products.find_by_name(name)

    def find_products_by_season(self, season: str) -> list[Product]:
        return self.products.find_by_season(season)

    def find_products_by_hectare_range(
        self,
        min_hectares: float | None = None,
        max_hectares: float | None = None,
    ) -> list[Product]:
        return self.products.find_by_hectare_range(min_hectares, max_hectares)

    def count_products(self) -> int:
        return self.products.count()

    def update_product(self, product_id: str, product: Product) -> Outcome[Product]:
        current = self.products.get(product_id)
        if current is None:
            return Outcome.fail(product_not_found(product_id))

        product = replace(
            product,
            id=product_id,
            production_date=product.production_date or current.production_date,
        )

        violations = validate_product(product)
        if violations:
            return Outcome.fail(invalid_fields("producto", violations))

        outcome = self.products.update(product_id, product)
        if outcome.ok:
            logger.info("Product updated", product_id=product_id)
        return outcome

    def delete_product(self, product_id: str) -> Outcome[Product]:
        """Delete a product that has no harvests.

        Products with harvests are rejected with ``PRODUCT_HAS_HARVESTS``;
        harvests are never removed implicitly.
        """
        if not self.products.exists(product_id):
            return Outcome.fail(product_not_found(product_id))

        with self._product_lock(product_id):
            if not self.products.exists(product_id):
                return Outcome.fail(product_not_found(product_id))

            dependents = self.harvests.find_by_product(product_id)
            if dependents:
                logger.warning(
                    "Product deletion rejected",
                    product_id=product_id,
                    harvest_count=len(dependents),
                )
                return Outcome.fail(product_has_harvests(product_id, len(dependents)))

            outcome = self.products.delete(product_id)

        if outcome.ok:
            logger.info("Product deleted", product_id=product_id)
        return outcome

    def product_statistics(self, product_id: str) -> Outcome[ProductStatistics]:
        product = self.products.get(product_id)
        if product is None:
            return Outcome.fail(product_not_found(product_id))

        harvests = self.harvests.find_by_product(product_id)
        total_quantity = sum(h.quantity or 0.0 for h in harvests)
        harvest_dates = [h.harvest_date for h in harvests if h.harvest_date is not None]

        return Outcome.success(
            ProductStatistics(
                product_id=product_id,
                product_name=product.name,
                harvest_count=len(harvests),
                total_harvested_quantity=total_quantity,
                average_harvest_quantity=total_quantity / len(harvests) if harvests else 0.0,
                last_harvest_date=max(harvest_dates) if harvest_dates else None,
                total_revenue=metrics.total_revenue(product),
                profitability=metrics.profitability(product),
                profit_margin=metrics.profit_margin(product),
            )
        )

    # =========================================================================
    # Harvests
    # =========================================================================

    def create_harvest(self, harvest: Harvest) -> Outcome[Harvest]:
        """Create a harvest referencing an existing product."""
        if harvest.harvest_date is None:
            harvest = replace(harvest, harvest_date=self._clock())

        violations = validate_harvest(harvest)
        if violations:
            return Outcome.fail(invalid_fields("cosecha", violations))

        product_id = harvest.product_id
        if not self.products.exists(product_id):
            logger.info("Harvest rejected", reason="unknown product", product_id=product_id)
            return Outcome.fail(unresolved_product_reference(product_id))

        with self._product_lock(product_id):
            # Re-check: the product may have been deleted while we waited.
            if not self.products.exists(product_id):
                return Outcome.fail(unresolved_product_reference(product_id))
            outcome = self.harvests.create(harvest)

        if outcome.ok:
            logger.info("Harvest created", harvest_id=outcome.value.id, product_id=product_id)
        return outcome

    def get_harvest(self, harvest_id: str) -> Outcome[Harvest]:
        harvest = self.harvests.get(harvest_id)
        if harvest is None:
            return Outcome.fail(harvest_not_found(harvest_id))
        return Outcome.success(harvest)

    def list_harvests(self) -> list[Harvest]:
        return self.harvests.list()

    def find_harvests_by_quality(self, quality: str) -> list[Harvest]:
        return self.harvests.find_by_quality(quality)

    def find_harvests_by_product(self, product_id: str) -> list[Harvest]:
        """Harvests referencing ``product_id``, without checking the product."""
        return self.harvests.find_by_product(product_id)

    def count_harvests(self) -> int:
        return self.harvests.count()

    def update_harvest(self, harvest_id: str, harvest: Harvest) -> Outcome[Harvest]:
        """Replace a harvest; the target product must exist."""
        return self._update_harvest(harvest_id, harvest)

    def _update_harvest(
        self,
        harvest_id: str,
        harvest: Harvest,
        owner_id: str | None = None,
    ) -> Outcome[Harvest]:
        """Replace a harvest under the locks of its current and target products.

        With ``owner_id`` the harvest must still belong to that product when
        the write happens. If the harvest changes while the locks are being
        acquired, the checks run again against the fresh copy.
        """
        while True:
            current = self.harvests.get(harvest_id)
            if current is None:
                return Outcome.fail(harvest_not_found(harvest_id))
            if owner_id is not None and current.product_id != owner_id:
                return Outcome.fail(harvest_not_belonging_to_product(harvest_id, owner_id))

            candidate = replace(
                harvest,
                id=harvest_id,
                harvest_date=harvest.harvest_date or current.harvest_date,
            )

            violations = validate_harvest(candidate)
            if violations:
                return Outcome.fail(invalid_fields("cosecha", violations))

            target_id = candidate.product_id
            if not self.products.exists(target_id):
                return Outcome.fail(unresolved_product_reference(target_id))

            with self._product_locks_held(current.product_id, target_id):
                if self.harvests.get(harvest_id) is not current:
                    continue
                if not self.products.exists(target_id):
                    return Outcome.fail(unresolved_product_reference(target_id))
                outcome = self.harvests.update(harvest_id, candidate)

            if outcome.ok:
                logger.info("Harvest updated", harvest_id=harvest_id, product_id=target_id)
            return outcome

    def delete_harvest(self, harvest_id: str) -> Outcome[Harvest]:
        outcome = self.harvests.delete(harvest_id)
        if outcome.ok:
            logger.info("Harvest deleted", harvest_id=harvest_id)
        return outcome

    # =========================================================================
    # Harvests scoped to a product
    # =========================================================================

    def list_harvests_for_product(self, product_id: str) -> Outcome[list[Harvest]]:
        if not self.products.exists(product_id):
            return Outcome.fail(product_not_found(product_id))
        return Outcome.success(self.harvests.find_by_product(product_id))

    def get_harvest_for_product(self, product_id: str, harvest_id: str) -> Outcome[Harvest]:
        """Fetch a harvest only if it belongs to ``product_id``."""
        if not self.products.exists(product_id):
            return Outcome.fail(product_not_found(product_id))

        harvest = self.harvests.get(harvest_id)
        if harvest is None:
            return Outcome.fail(harvest_not_found(harvest_id))

        if harvest.product_id != product_id:
            logger.warning(
                "Cross-product harvest access rejected",
                product_id=product_id,
                harvest_id=harvest_id,
            )
            return Outcome.fail(harvest_not_belonging_to_product(harvest_id, product_id))

        return Outcome.success(harvest)

    def create_harvest_for_product(self, product_id: str, harvest: Harvest) -> Outcome[Harvest]:
        if not self.products.exists(product_id):
            return Outcome.fail(product_not_found(product_id))
        return self.create_harvest(replace(harvest, product_id=product_id))

    def update_harvest_for_product(
        self,
        product_id: str,
        harvest_id: str,
        harvest: Harvest,
    ) -> Outcome[Harvest]:
        if not self.products.exists(product_id):
            return Outcome.fail(product_not_found(product_id))
        return self._update_harvest(
            harvest_id,
            replace(harvest, product_id=product_id),
            owner_id=product_id,
        )

    def delete_harvest_for_product(self, product_id: str, harvest_id: str) -> Outcome[Harvest]:
        """Delete a harvest only if it still belongs to ``product_id``."""
        if not self.products.exists(product_id):
            return Outcome.fail(product_not_found(product_id))

        # Moving a harvest away holds its owner's lock, so ownership cannot
        # change between the check and the delete.
        with self._product_lock(product_id):
            owned = self.get_harvest_for_product(product_id, harvest_id)
            if not owned.ok:
                return owned
            return self.delete_harvest(harvest_id)
