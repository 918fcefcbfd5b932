"""Product collection and its search predicates."""

from agropecuario.core.base_store import InMemoryStore
from agropecuario.core.entities import Product
from agropecuario.core.ids import EntityKind
from agropecuario.core.outcome import Failure, product_already_exists, product_not_found


def _normalize(value: str | None) -> str:
    return (value or "").strip().casefold()


class ProductStore(InMemoryStore[Product]):
    """Concurrency-safe store of products.

    Crop type and season searches are case-insensitive exact matches; name
    search is a case-insensitive substring match.
    """

    kind = EntityKind.PRODUCT

    def _not_found(self, entity_id: str) -> Failure:
        return product_not_found(entity_id)

    def _already_exists(self, entity_id: str) -> Failure:
        return product_already_exists(entity_id)

    def find_by_crop_type(self, crop_type: str) -> list[Product]:
        wanted = _normalize(crop_type)
        return self.find(lambda p: _normalize(p.crop_type) == wanted)

    def find_by_name(self, name: str) -> list[Product]:
        wanted = _normalize(name)
        return self.find(lambda p: wanted in _normalize(p.name))

    def find_by_season(self, season: str) -> list[Product]:
        wanted = _normalize(season)
        return self.find(lambda p: _normalize(p.season) == wanted)

    def find_by_hectare_range(
        self,
        min_hectares: float | None = None,
        max_hectares: float | None = None,
    ) -> list[Product]:
        """Products whose cultivated area lies in ``[min, max]``.

        A missing bound leaves that side open; with neither bound every
        product is returned.
        """

        def in_range(product: Product) -> bool:
            hectares = product.cultivated_hectares
            if hectares is None:
                return min_hectares is None and max_hectares is None
            if min_hectares is not None and hectares < min_hectares:
                return False
            if max_hectares is not None and hectares > max_hectares:
                return False
            return True

        return self.find(in_range)
