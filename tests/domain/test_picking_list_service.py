"""Unit tests for the picking-list domain service."""

from collections import defaultdict

import pytest

from backoffice.domain.exceptions import CyclicCompositionError
from backoffice.domain.model.order import OrderStatus
from backoffice.domain.model.product import UNKNOWN_PRODUCT_NAME, Product
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.entity_source import EntitySnapshot
from backoffice.domain.service.enrichment_service import EnrichmentService
from backoffice.domain.service.picking_list_service import (
    PickingListService,
    PickUnit,
    name_sort_key,
)
from tests.fakes import CUSTOMERS, WAREHOUSES, bundle, catalog, leaf, order


def _enriched(products, orders):
    snapshot = EntitySnapshot(
        orders=orders, customers=CUSTOMERS, products=products, warehouses=WAREHOUSES
    )
    return EnrichmentService(snapshot).orders(orders)


# ── Decomposition ────────────────────────────────────────────────────────────


class TestDecompose:

    def test_leaf_is_itself(self):
        service = PickingListService(catalog())
        assert service.decompose("p1", 3) == [PickUnit("p1", "Coffee beans", 3)]

    def test_composite_multiplies_child_quantities(self):
        service = PickingListService(catalog())
        assert service.decompose("k1", 2) == [
            PickUnit("p1", "Coffee beans", 2),
            PickUnit("p2", "Mug", 4),
        ]

    def test_nested_composite_reaches_leaves(self):
        service = PickingListService(catalog())
        units = service.decompose("k2", 2)
        assert units == [
            PickUnit("p1", "Coffee beans", 2),
            PickUnit("p2", "Mug", 4),
            PickUnit("p3", "Filters", 6),
        ]

    def test_total_quantity_is_product_of_path_quantities(self):
        products = [
            bundle("a", "A", [("b", 2)]),
            bundle("b", "B", [("c", 3)]),
            bundle("c", "C", [("leaf", 5)]),
            leaf("leaf", "Leaf"),
        ]
        assert PickingListService(products).decompose("a", 7) == [
            PickUnit("leaf", "Leaf", 2 * 3 * 5 * 7)
        ]

    def test_unknown_product_kept_with_sentinel_name(self):
        service = PickingListService(catalog())
        assert service.decompose("ghost", 4) == [PickUnit("ghost", UNKNOWN_PRODUCT_NAME, 4)]

    def test_unknown_child_kept_with_sentinel_name(self):
        service = PickingListService([bundle("k", "Kit", [("ghost", 2)])])
        assert service.decompose("k", 1) == [PickUnit("ghost", UNKNOWN_PRODUCT_NAME, 2)]

    def test_composite_without_children_is_picked_as_is(self):
        kit = Product(id="k", name="Kit", price=Money.zero(), is_composite=True)
        assert PickingListService([kit]).decompose("k", 2) == [PickUnit("k", "Kit", 2)]

    def test_composite_with_empty_children_yields_nothing(self):
        kit = Product(id="k", name="Kit", price=Money.zero(), is_composite=True, children=[])
        assert PickingListService([kit]).decompose("k", 2) == []

    def test_shared_component_is_not_a_cycle(self):
        products = [
            bundle("top", "Top", [("left", 1), ("right", 1)]),
            bundle("left", "Left", [("shared", 2)]),
            bundle("right", "Right", [("shared", 3)]),
            leaf("shared", "Shared"),
        ]
        units = PickingListService(products).decompose("top", 1)
        assert [u.quantity for u in units] == [2, 3]

    def test_direct_cycle_rejected(self):
        service = PickingListService([bundle("k", "Kit", [("k", 1)])])
        with pytest.raises(CyclicCompositionError) as exc_info:
            service.decompose("k", 1)
        assert exc_info.value.product_id == "k"
        assert exc_info.value.kind == "cyclic_composition"

    def test_indirect_cycle_rejected(self):
        products = [
            bundle("a", "A", [("b", 1)]),
            bundle("b", "B", [("c", 1)]),
            bundle("c", "C", [("a", 1)]),
        ]
        with pytest.raises(CyclicCompositionError, match=r"a -> b -> c -> a"):
            PickingListService(products).decompose("a", 1)


# ── Aggregation ──────────────────────────────────────────────────────────────


class TestAggregate:

    def test_quantities_summed_per_leaf_and_warehouse(self):
        products = catalog()
        orders = [
            order("1", [("k1", 1), ("p1", 2)], warehouse_id="w1"),
            order("2", [("k2", 1)], customer_id="c2", warehouse_id="w1"),
            order("3", [("p1", 5)], warehouse_id="w2"),
        ]
        entries = PickingListService(products).aggregate(_enriched(products, orders))

        by_key = {(e.product_id, e.warehouse_id): e for e in entries}
        assert by_key[("p1", "w1")].quantity == 1 + 2 + 1
        assert by_key[("p2", "w1")].quantity == 2 + 2
        assert by_key[("p3", "w1")].quantity == 3
        assert by_key[("p1", "w2")].quantity == 5
        assert by_key[("p1", "w2")].warehouse_name == "South"
        assert len(entries) == 4

    def test_no_composite_in_output(self):
        products = catalog()
        orders = [order("1", [("k2", 2), ("k1", 1)])]
        entries = PickingListService(products).aggregate(_enriched(products, orders))
        composite_ids = {p.id for p in products if not p.is_leaf}
        assert not composite_ids & {e.product_id for e in entries}

    def test_entry_quantity_equals_sum_of_traces(self):
        products = catalog()
        orders = [
            order("1", [("k1", 3), ("p2", 1)]),
            order("2", [("k2", 2)], customer_id="c2"),
        ]
        for entry in PickingListService(products).aggregate(_enriched(products, orders)):
            assert entry.quantity == sum(t.quantity for t in entry.orders)

    def test_totals_are_conserved(self):
        products = catalog()
        orders = [order("1", [("k2", 2), ("p1", 1)]), order("2", [("k1", 4)])]
        service = PickingListService(products)
        entries = service.aggregate(_enriched(products, orders))

        expected = defaultdict(int)
        for o in orders:
            for item in o.line_items:
                for unit in service.decompose(item.product_id, item.quantity.value):
                    expected[unit.product_id] += unit.quantity
        assert {e.product_id: e.quantity for e in entries} == dict(expected)

    def test_traces_point_back_to_ordered_product(self):
        products = catalog()
        orders = [order("1", [("k1", 1)]), order("2", [("p2", 1)], customer_id="c2")]
        entries = PickingListService(products).aggregate(_enriched(products, orders))
        mug = next(e for e in entries if e.product_id == "p2")

        assert [(t.order_id, t.customer_name, t.quantity, t.original_product) for t in mug.orders] == [
            ("1", "Alice Martin", 2, "Starter kit"),
            ("2", "Bob Durand", 1, "Mug"),
        ]

    def test_sorted_by_name_ignoring_case_and_accents(self):
        products = [leaf("1", "écran"), leaf("2", "Banane"), leaf("3", "Zèbre"), leaf("4", "abricot")]
        orders = [order("1", [("1", 1), ("2", 1), ("3", 1), ("4", 1)])]
        entries = PickingListService(products).aggregate(_enriched(products, orders))
        assert [e.name for e in entries] == ["abricot", "Banane", "écran", "Zèbre"]

    def test_empty_orders_give_empty_list(self):
        assert PickingListService(catalog()).aggregate([]) == []

    def test_cycle_fails_whole_aggregation(self):
        products = [leaf("p1", "Mug"), bundle("k", "Kit", [("k", 1)])]
        orders = [order("1", [("p1", 1)]), order("2", [("k", 1)])]
        with pytest.raises(CyclicCompositionError):
            PickingListService(products).aggregate(_enriched(products, orders))

    def test_does_not_mutate_inputs(self):
        products = catalog()
        orders = [order("1", [("k2", 1)], status=OrderStatus.PENDING)]
        enriched = _enriched(products, orders)
        before = [(o.id, [(i.product_id, i.quantity) for i in o.line_items]) for o in enriched]
        PickingListService(products).aggregate(enriched)
        assert [(o.id, [(i.product_id, i.quantity) for i in o.line_items]) for o in enriched] == before


class TestWorkedExamples:

    def test_single_level_bundle_once_and_five_times(self):
        products = [leaf("a", "A"), leaf("b", "B"), bundle("k", "Kit", [("a", 1), ("b", 2)])]
        service = PickingListService(products)
        assert [u.quantity for u in service.decompose("k", 1)] == [1, 2]
        assert [u.quantity for u in service.decompose("k", 5)] == [5, 10]

    def test_two_level_bundle_multiplies(self):
        products = [leaf("x", "X"), bundle("inner", "Inner", [("x", 4)]), bundle("outer", "Outer", [("inner", 2)])]
        assert PickingListService(products).decompose("outer", 1) == [PickUnit("x", "X", 8)]

    def test_same_leaf_from_two_orders(self):
        products = [leaf("w", "Widget")]
        orders = [order("1", [("w", 3)]), order("2", [("w", 5)], customer_id="c2")]
        (entry,) = PickingListService(products).aggregate(_enriched(products, orders))
        assert entry.quantity == 8
        assert [(t.order_id, t.quantity) for t in entry.orders] == [("1", 3), ("2", 5)]

    def test_same_leaf_in_two_warehouses_stays_apart(self):
        products = [leaf("w", "Widget")]
        orders = [order("1", [("w", 3)], warehouse_id="w1"), order("2", [("w", 5)], warehouse_id="w2")]
        entries = PickingListService(products).aggregate(_enriched(products, orders))
        assert [(e.warehouse_id, e.quantity) for e in entries] == [("w1", 3), ("w2", 5)]

    def test_case_insensitive_name_order(self):
        products = [leaf("1", "Widget B"), leaf("2", "widget a"), leaf("3", "Cable")]
        orders = [order("1", [("1", 1), ("2", 1), ("3", 1)])]
        entries = PickingListService(products).aggregate(_enriched(products, orders))
        assert [e.name for e in entries] == ["Cable", "widget a", "Widget B"]

    def test_two_product_cycle_fails_the_same_way_every_time(self):
        products = [bundle("a", "A", [("b", 1)]), bundle("b", "B", [("a", 1)])]
        service = PickingListService(products)
        messages = set()
        for _ in range(3):
            with pytest.raises(CyclicCompositionError) as exc_info:
                service.decompose("a", 1)
            messages.add(str(exc_info.value))
        assert messages == {"Product 'a' has a cyclic composition (a -> b -> a)"}


def test_name_sort_key_folds_accents_and_case():
    assert name_sort_key("Écran") == name_sort_key("ecran")
    assert name_sort_key("ÉCRAN") == "ecran"
