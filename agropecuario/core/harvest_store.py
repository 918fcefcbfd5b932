"""Harvest collection and its search predicates."""

from agropecuario.core.base_store import InMemoryStore
from agropecuario.core.entities import Harvest
from agropecuario.core.ids import EntityKind
from agropecuario.core.outcome import Failure, harvest_already_exists, harvest_not_found


class HarvestStore(InMemoryStore[Harvest]):
    """Concurrency-safe store of harvests.

    The store does not know about products: it accepts any ``product_id``.
    Referential checks belong to the coordinator.
    """

    kind = EntityKind.HARVEST

    def _not_found(self, entity_id: str) -> Failure:
        return harvest_not_found(entity_id)

    def _already_exists(self, entity_id: str) -> Failure:
        return harvest_already_exists(entity_id)

    def find_by_product(self, product_id: str) -> list[Harvest]:
        """Harvests whose ``product_id`` equals ``product_id`` exactly."""
        return self.find(lambda h: h.product_id == product_id)

    def find_by_quality(self, quality: str) -> list[Harvest]:
        wanted = quality.strip().casefold()
        return self.find(lambda h: (h.quality or "").casefold() == wanted)
