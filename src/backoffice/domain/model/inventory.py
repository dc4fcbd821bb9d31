"""InventoryItem aggregate: stock of one product in one warehouse.

Each record knows the total quantity on the shelves, how much of it is
reserved for orders, and the threshold under which it should be
restocked.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from backoffice.domain.exceptions import ValidationError


@dataclass
class InventoryItem:
    """Aggregate root for inventory tracking.

    Invariants:
    - all quantities are non-negative integers
    - ``reserved_quantity`` can never exceed ``total_quantity``
    """

    id: str
    product_id: str
    warehouse_id: str
    total_quantity: int
    reserved_quantity: int = 0
    min_threshold: int = 0
    last_updated: datetime | None = None

    @property
    def available_quantity(self) -> int:
        return self.total_quantity - self.reserved_quantity

    @property
    def is_below_threshold(self) -> bool:
        return self.available_quantity < self.min_threshold

    def adjust(
        self,
        total_quantity: int | None = None,
        reserved_quantity: int | None = None,
        min_threshold: int | None = None,
    ) -> None:
        """Overwrite the given quantities, leaving the others untouched.

        Raises ValidationError (and changes nothing) if the resulting
        record would break an invariant.
        """
        total = self.total_quantity if total_quantity is None else total_quantity
        reserved = (
            self.reserved_quantity if reserved_quantity is None else reserved_quantity
        )
        threshold = self.min_threshold if min_threshold is None else min_threshold

        for label, value in (
            ("Total quantity", total),
            ("Reserved quantity", reserved),
            ("Minimum threshold", threshold),
        ):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(f"{label} must be an integer")
            if value < 0:
                raise ValidationError(f"{label} cannot be negative")

        if reserved > total:
            raise ValidationError(
                f"Reserved quantity ({reserved}) cannot exceed "
                f"total quantity ({total})"
            )

        self.total_quantity = total
        self.reserved_quantity = reserved
        self.min_threshold = threshold
        self.last_updated = datetime.now(timezone.utc)
