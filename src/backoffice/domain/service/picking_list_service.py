"""Domain service: Picking List aggregation.

Turns a set of orders into the list of shelf products a warehouse has to
pick.  Composite products (bundles) are decomposed recursively into their
leaf components; the required quantities are then summed per leaf product
*per warehouse*, keeping one trace record per contributing order line.

The service is pure: it reads the product catalog it was built with and
the orders it is given, and mutates neither.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass
from typing import Iterable

from backoffice.domain.exceptions import CyclicCompositionError
from backoffice.domain.model.product import UNKNOWN_PRODUCT_NAME, Product
from backoffice.domain.model.views import EnrichedOrder, PickEntry, PickTrace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickUnit:
    """A leaf product and the quantity of it one order line requires."""

    product_id: str
    name: str
    quantity: int


def name_sort_key(name: str) -> str:
    """Case- and accent-insensitive collation key ("Écran" sorts as "ecran")."""
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


class PickingListService:

    def __init__(self, products: Iterable[Product]) -> None:
        self._products = {p.id: p for p in products}

    def decompose(self, product_id: str, quantity: int) -> list[PickUnit]:
        """Expand ``quantity`` units of a product into leaf units.

        - leaf product -> one unit with the same quantity
        - composite -> the concatenated expansion of each child, with the
          child quantity multiplied by ``quantity``
        - unknown product id -> one unit under a sentinel name

        Raises CyclicCompositionError if a product is reached again
        through its own components.
        """
        return self._decompose(product_id, quantity, ())

    def aggregate(self, orders: Iterable[EnrichedOrder]) -> list[PickEntry]:
        """Build the picking list for ``orders``, sorted by product name."""
        entries: dict[tuple[str, str], PickEntry] = {}

        for order in orders:
            for item in order.line_items:
                for unit in self.decompose(item.product_id, item.quantity):
                    key = (unit.product_id, order.warehouse_id)
                    entry = entries.get(key)
                    if entry is None:
                        entry = PickEntry(
                            product_id=unit.product_id,
                            name=unit.name,
                            warehouse_id=order.warehouse_id,
                            warehouse_name=order.warehouse_name,
                        )
                        entries[key] = entry
                    entry.add(
                        PickTrace(
                            order_id=order.id,
                            customer_name=order.customer_name,
                            quantity=unit.quantity,
                            original_product=item.name,
                        )
                    )

        return sorted(entries.values(), key=lambda e: name_sort_key(e.name))

    # --- Internal helpers -----------------------------------------------------

    def _decompose(
        self, product_id: str, quantity: int, path: tuple[str, ...]
    ) -> list[PickUnit]:
        # path holds the composites above this node only; a component
        # shared by two different bundles is not a cycle
        if product_id in path:
            logger.warning(
                "Cyclic composition for product %s via %s", product_id, path
            )
            raise CyclicCompositionError(product_id, path)

        product = self._products.get(product_id)
        if product is None:
            return [PickUnit(product_id, UNKNOWN_PRODUCT_NAME, quantity)]

        if product.is_leaf:
            return [PickUnit(product.id, product.name, quantity)]

        units: list[PickUnit] = []
        for component in product.components:
            units.extend(
                self._decompose(
                    component.product_id,
                    component.quantity.value * quantity,
                    path + (product_id,),
                )
            )
        return units
