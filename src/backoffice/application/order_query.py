"""Order filtering, sorting and pagination over enriched orders.

Shared by the order listing, the picking list and the order export.  The
picking list and the export call ``find_all`` so they see every matching
order, never a single page.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from backoffice.application.dates import as_local
from backoffice.application.dto import ALL, OrderFilters, Page, TimePeriod, TimeWindow
from backoffice.domain.model.views import EnrichedOrder
from backoffice.domain.repository.entity_source import EntitySource
from backoffice.domain.service.enrichment_service import EnrichmentService


def in_window(moment: datetime, window: TimeWindow, now: datetime) -> bool:
    """True if ``moment`` falls inside ``window`` as seen at ``now`` (local time)."""
    moment = as_local(moment)
    today = datetime.combine(now.date(), datetime.min.time())

    if window.period is TimePeriod.TODAY:
        return today <= moment < today + timedelta(days=1)
    if window.period is TimePeriod.YESTERDAY:
        return today - timedelta(days=1) <= moment < today
    if window.period is TimePeriod.WEEK:
        return moment >= today - timedelta(days=7)
    if window.period is TimePeriod.CUSTOM:
        return window.start <= moment <= window.end
    return True


def matches(order: EnrichedOrder, filters: OrderFilters, now: datetime) -> bool:
    if filters.warehouse_id != ALL and order.warehouse_id != filters.warehouse_id:
        return False
    if filters.status is not None and order.status is not filters.status:
        return False
    if not in_window(order.date, filters.window, now):
        return False
    if filters.search:
        needle = filters.search.lower()
        if needle not in order.id.lower() and needle not in order.customer_name.lower():
            return False
    return True


class OrderQuery:

    def __init__(
        self,
        source: EntitySource,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._source = source
        self._clock = clock

    def find_all(self, filters: OrderFilters) -> list[EnrichedOrder]:
        """Every order matching ``filters``, sorted, ignoring paging."""
        snapshot = self._source.snapshot()
        now = self._clock()
        enriched = EnrichmentService(snapshot).orders(snapshot.orders)
        selected = [order for order in enriched if matches(order, filters, now)]
        selected.sort(key=filters.sort_by.key, reverse=filters.sort_order.reverse)
        return selected

    def find_page(self, filters: OrderFilters) -> Page[EnrichedOrder]:
        return Page.slice(
            self.find_all(filters), filters.page, filters.items_per_page
        )
