"""Product aggregate.

A product is either a *leaf* (stocked and picked directly from a shelf)
or a *composite* bundle whose fulfillment requires a fixed bill of child
products.  Children reference other products by id and may themselves
be composite, forming a tree.
"""

from __future__ import annotations

from dataclasses import dataclass

from backoffice.domain.model.value_objects import Money, Quantity

UNKNOWN_PRODUCT_NAME = "Unknown product"


@dataclass(frozen=True)
class ProductComponent:
    """One entry of a composite product's bill: ``quantity`` units of ``product_id``."""

    product_id: str
    quantity: Quantity


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``children`` is ``None`` for products that were never composite
    - a product counts as a leaf when it is not composite *or* has no
      ``children`` list at all; a composite with an empty list is a
      bundle of nothing
    """

    id: str
    name: str
    price: Money
    is_composite: bool = False
    children: list[ProductComponent] | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.is_composite or self.children is None

    @property
    def components(self) -> list[ProductComponent]:
        if self.is_leaf:
            return []
        return list(self.children or [])
