"""Tests for parsing and validating filter objects."""

from datetime import datetime

import pytest

from backoffice.application.dto import (
    OrderFilters,
    Page,
    PickingListFilters,
    StockFilters,
    TimePeriod,
    TimeWindow,
    WarehouseFilters,
)
from backoffice.application.sorting import OrderSortField, SortOrder, StockSortField
from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.order import OrderStatus


class TestTimeWindow:

    def test_default_is_all(self):
        assert TimeWindow.parse().period is TimePeriod.ALL

    def test_custom_end_covers_whole_day(self):
        window = TimeWindow.parse("custom", "2024-03-01", "2024-03-05")
        assert window.start == datetime(2024, 3, 1)
        assert window.end.date() == datetime(2024, 3, 5).date()
        assert window.end.hour == 23 and window.end.minute == 59

    def test_custom_requires_both_dates(self):
        with pytest.raises(ValidationError, match="Start and end dates are required"):
            TimeWindow.parse("custom", "2024-03-01", None)

    def test_custom_start_later_on_end_day_accepted(self):
        window = TimeWindow.parse("custom", "2024-03-05T10:00:00", "2024-03-05")
        assert window.start == datetime(2024, 3, 5, 10)
        assert window.end.date() == datetime(2024, 3, 5).date()
        assert window.start < window.end

    def test_custom_start_after_end_rejected(self):
        with pytest.raises(ValidationError, match="Start date must not be after end date"):
            TimeWindow.parse("custom", "2024-03-05", "2024-03-01")

    def test_invalid_date_rejected(self):
        with pytest.raises(ValidationError, match="Invalid start date format"):
            TimeWindow.parse("custom", "yesterday-ish", "2024-03-01")

    def test_unknown_period_rejected(self):
        with pytest.raises(ValidationError, match="Invalid time period"):
            TimeWindow.parse("month")

    def test_dates_ignored_outside_custom(self):
        window = TimeWindow.parse("today", "garbage", "garbage")
        assert window.period is TimePeriod.TODAY
        assert window.start is None


class TestOrderFilters:

    def test_parse_defaults(self):
        filters = OrderFilters.parse()
        assert filters.status is None
        assert filters.sort_by is OrderSortField.DATE
        assert filters.sort_order is SortOrder.DESC
        assert (filters.page, filters.items_per_page) == (1, 25)

    def test_parse_values(self):
        filters = OrderFilters.parse(
            warehouse_id="w1", status="shipped", search="  alice ",
            sort_by="customerId", sort_order="asc", page=2, items_per_page=100,
        )
        assert filters.warehouse_id == "w1"
        assert filters.status is OrderStatus.SHIPPED
        assert filters.search == "alice"
        assert filters.sort_by is OrderSortField.CUSTOMER
        assert filters.sort_order is SortOrder.ASC

    def test_unknown_sort_field_rejected(self):
        with pytest.raises(ValidationError, match="Invalid sort field"):
            OrderFilters.parse(sort_by="price; drop table")

    def test_unknown_sort_order_rejected(self):
        with pytest.raises(ValidationError, match="Invalid sort order"):
            OrderFilters.parse(sort_order="sideways")

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="Invalid order status"):
            OrderFilters.parse(status="lost")

    def test_page_below_one_rejected(self):
        with pytest.raises(ValidationError, match="Page number must be at least 1"):
            OrderFilters.parse(page=0)

    @pytest.mark.parametrize("per_page", [0, 101])
    def test_items_per_page_bounds(self, per_page):
        with pytest.raises(ValidationError, match="Items per page must be between 1 and 100"):
            OrderFilters.parse(items_per_page=per_page)


class TestOtherFilters:

    def test_picking_list_filters_select_pending_orders(self):
        order_filters = PickingListFilters.parse(warehouse_id="w2", search=" 42 ").to_order_filters()
        assert order_filters.status is OrderStatus.PENDING
        assert order_filters.warehouse_id == "w2"
        assert order_filters.search == "42"

    def test_stock_filters_defaults(self):
        filters = StockFilters.parse()
        assert filters.sort_by is StockSortField.NAME
        assert filters.sort_order is SortOrder.ASC

    def test_stock_filters_reject_unknown_field(self):
        with pytest.raises(ValidationError):
            StockFilters.parse(sort_by="price")

    def test_warehouse_filters_validate_paging_when_given(self):
        with pytest.raises(ValidationError):
            WarehouseFilters(page=0, items_per_page=10)


class TestPage:

    def test_slice_and_navigation(self):
        page = Page.slice(list(range(60)), page=2, items_per_page=25)
        assert page.items == list(range(25, 50))
        assert page.total_pages == 3
        assert page.has_next_page and page.has_prev_page

    def test_page_past_the_end_is_empty(self):
        page = Page.slice(list(range(5)), page=3, items_per_page=25)
        assert page.items == []
        assert page.total_items == 5
        assert not page.has_next_page

    def test_empty(self):
        page = Page.slice([], page=1, items_per_page=25)
        assert page.total_pages == 0
        assert not page.has_next_page and not page.has_prev_page
