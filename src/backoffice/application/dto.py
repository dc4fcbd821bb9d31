"""Data Transfer Objects: plain containers that cross layer boundaries.

Filter objects are the boundary between raw user input and the queries:
their ``parse`` factories turn strings into enums and datetimes and
reject anything malformed, so handlers only ever see valid filters.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from backoffice.application.dates import end_of_day, parse_user_date
from backoffice.application.sorting import (
    OrderSortField,
    SortOrder,
    StockSortField,
    WarehouseSortField,
    parse_choice,
)
from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.order import OrderStatus
from backoffice.domain.model.views import PickEntry

T = TypeVar("T")

ALL = "all"
MAX_ITEMS_PER_PAGE = 100


class TimePeriod(Enum):
    ALL = "all"
    TODAY = "today"
    YESTERDAY = "yesterday"
    WEEK = "week"
    CUSTOM = "custom"


def _check_paging(page: int, items_per_page: int) -> None:
    if page < 1:
        raise ValidationError("Page number must be at least 1")
    if not 1 <= items_per_page <= MAX_ITEMS_PER_PAGE:
        raise ValidationError(
            f"Items per page must be between 1 and {MAX_ITEMS_PER_PAGE}"
        )


@dataclass(frozen=True)
class TimeWindow:
    """A time period plus, for CUSTOM, its inclusive bounds."""

    period: TimePeriod = TimePeriod.ALL
    start: datetime | None = None
    end: datetime | None = None

    def __post_init__(self) -> None:
        if self.period is TimePeriod.CUSTOM:
            if self.start is None or self.end is None:
                raise ValidationError(
                    "Start and end dates are required for a custom period"
                )
            # The whole end day is included
            end = end_of_day(self.end)
            if self.start > end:
                raise ValidationError("Start date must not be after end date")
            object.__setattr__(self, "end", end)

    @staticmethod
    def parse(
        period: str | TimePeriod = ALL,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> TimeWindow:
        resolved = parse_choice(TimePeriod, period, "time period")
        if resolved is not TimePeriod.CUSTOM:
            return TimeWindow(resolved)
        return TimeWindow(
            resolved,
            start=parse_user_date(start_date, "start date") if start_date else None,
            end=parse_user_date(end_date, "end date") if end_date else None,
        )


@dataclass(frozen=True)
class OrderFilters:
    warehouse_id: str = ALL
    status: OrderStatus | None = None  # None means every status
    window: TimeWindow = field(default_factory=TimeWindow)
    search: str = ""
    sort_by: OrderSortField = OrderSortField.DATE
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    items_per_page: int = 25

    def __post_init__(self) -> None:
        object.__setattr__(self, "search", self.search.strip())
        _check_paging(self.page, self.items_per_page)

    @staticmethod
    def parse(
        warehouse_id: str = ALL,
        status: str = ALL,
        period: str = ALL,
        start_date: str | None = None,
        end_date: str | None = None,
        search: str = "",
        sort_by: str = "date",
        sort_order: str = "desc",
        page: int = 1,
        items_per_page: int = 25,
    ) -> OrderFilters:
        return OrderFilters(
            warehouse_id=warehouse_id or ALL,
            status=None if status in (ALL, "", None) else OrderStatus.parse(status),
            window=TimeWindow.parse(period, start_date, end_date),
            search=search or "",
            sort_by=OrderSortField.parse(sort_by),
            sort_order=parse_choice(SortOrder, sort_order, "sort order"),
            page=page,
            items_per_page=items_per_page,
        )


@dataclass(frozen=True)
class PickingListFilters:
    """Selection of the orders to pick.  Status is always ``pending``."""

    warehouse_id: str = ALL
    window: TimeWindow = field(default_factory=TimeWindow)
    search: str = ""

    @staticmethod
    def parse(
        warehouse_id: str = ALL,
        period: str = ALL,
        start_date: str | None = None,
        end_date: str | None = None,
        search: str = "",
    ) -> PickingListFilters:
        return PickingListFilters(
            warehouse_id=warehouse_id or ALL,
            window=TimeWindow.parse(period, start_date, end_date),
            search=(search or "").strip(),
        )

    def to_order_filters(self) -> OrderFilters:
        return OrderFilters(
            warehouse_id=self.warehouse_id,
            status=OrderStatus.PENDING,
            window=self.window,
            search=self.search,
        )


@dataclass(frozen=True)
class StockFilters:
    warehouse_id: str = ALL
    search: str = ""
    sort_by: StockSortField = StockSortField.NAME
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1
    items_per_page: int = 25

    def __post_init__(self) -> None:
        object.__setattr__(self, "search", self.search.strip())
        _check_paging(self.page, self.items_per_page)

    @staticmethod
    def parse(
        warehouse_id: str = ALL,
        search: str = "",
        sort_by: str = "name",
        sort_order: str = "asc",
        page: int = 1,
        items_per_page: int = 25,
    ) -> StockFilters:
        return StockFilters(
            warehouse_id=warehouse_id or ALL,
            search=search or "",
            sort_by=StockSortField.parse(sort_by),
            sort_order=parse_choice(SortOrder, sort_order, "sort order"),
            page=page,
            items_per_page=items_per_page,
        )


@dataclass(frozen=True)
class WarehouseFilters:
    search: str = ""
    sort_by: WarehouseSortField = WarehouseSortField.NAME
    sort_order: SortOrder = SortOrder.ASC
    page: int | None = None  # no page: return every warehouse
    items_per_page: int | None = None

    def __post_init__(self) -> None:
        if self.page is not None or self.items_per_page is not None:
            _check_paging(
                1 if self.page is None else self.page,
                25 if self.items_per_page is None else self.items_per_page,
            )


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing plus the numbers needed to navigate it."""

    items: list[T]
    total_items: int
    current_page: int
    items_per_page: int

    @property
    def total_pages(self) -> int:
        if self.items_per_page <= 0:
            return 0
        return math.ceil(self.total_items / self.items_per_page)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1

    @staticmethod
    def slice(items: list[T], page: int, items_per_page: int) -> Page[T]:
        start = (page - 1) * items_per_page
        return Page(
            items=items[start:start + items_per_page],
            total_items=len(items),
            current_page=page,
            items_per_page=items_per_page,
        )


@dataclass(frozen=True)
class PickingListResult:
    entries: list[PickEntry]

    @property
    def total_products(self) -> int:
        return len(self.entries)

    @property
    def total_quantity(self) -> int:
        return sum(entry.quantity for entry in self.entries)

    @property
    def order_ids(self) -> set[str]:
        return {trace.order_id for entry in self.entries for trace in entry.orders}
