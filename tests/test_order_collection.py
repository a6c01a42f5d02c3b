import unittest
from unittest.mock import MagicMock

from domain.models import Order
from order_store import StoreError, TransportError
from services.order_collection import OrderCollectionCache, filter_orders


def _order(key, order_id, **values):
    return Order(id=key, order_id=order_id, **values)


ORDERS = [
    _order("1", "ORD-100", item_name="Bolt"),
    _order("2", "ord-200", item_name="Nut"),
    _order("3", "PO-310", item_name="Washer"),
]


class TestFilterOrders(unittest.TestCase):
    def test_empty_term_keeps_everything(self):
        self.assertEqual(filter_orders(ORDERS, ""), ORDERS)

    def test_case_insensitive_substring(self):
        self.assertEqual([o.id for o in filter_orders(ORDERS, "ord-1")], ["1"])
        self.assertEqual([o.id for o in filter_orders(ORDERS, "ORD")], ["1", "2"])
        self.assertEqual([o.id for o in filter_orders(ORDERS, "10")], ["1", "3"])

    def test_no_match(self):
        self.assertEqual(filter_orders(ORDERS, "zzz"), [])


class TestOrderCollectionCache(unittest.TestCase):
    def setUp(self):
        self.store = MagicMock()
        self.store.list_orders.return_value = list(ORDERS)
        self.cache = OrderCollectionCache(self.store)

    def test_load_replaces_snapshot_and_resets_filter(self):
        self.cache.load()
        self.cache.set_search_term("PO")
        self.assertEqual(len(self.cache.filtered_orders), 1)

        ok, _ = self.cache.load()

        self.assertTrue(ok)
        self.assertTrue(self.cache.loaded)
        self.assertEqual(self.cache.search_term, "")
        self.assertEqual(self.cache.orders, ORDERS)
        self.assertEqual(self.cache.filtered_orders, ORDERS)

    def test_load_failure_keeps_previous_snapshot(self):
        self.cache.load()
        self.cache.set_search_term("ord")
        self.store.list_orders.side_effect = TransportError("connection refused")

        ok, msg = self.cache.load()

        self.assertFalse(ok)
        self.assertIn("connection refused", msg)
        self.assertEqual(self.cache.orders, ORDERS)
        self.assertEqual([o.id for o in self.cache.filtered_orders], ["1", "2"])
        self.assertEqual(self.cache.search_term, "ord")

    def test_generation_counts_successful_loads_only(self):
        self.assertEqual(self.cache.generation, 0)
        self.cache.load()
        self.cache.load()
        self.assertEqual(self.cache.generation, 2)

        self.store.list_orders.side_effect = TransportError("timed out")
        self.cache.load()
        self.assertEqual(self.cache.generation, 2)

    def test_reload_after_remove_resets_search(self):
        self.cache.load()
        self.cache.set_search_term("ord")
        generation = self.cache.generation

        self.cache.remove("1")

        self.assertEqual(self.cache.generation, generation + 1)
        self.assertEqual(self.cache.search_term, "")
        self.assertEqual(self.cache.filtered_orders, self.cache.orders)

    def test_first_load_failure_leaves_cache_empty(self):
        self.store.list_orders.side_effect = StoreError("HTTP 500", status_code=500)
        ok, _ = self.cache.load()
        self.assertFalse(ok)
        self.assertFalse(self.cache.loaded)
        self.assertEqual(self.cache.orders, [])

    def test_set_search_term_is_idempotent(self):
        self.cache.load()
        once = self.cache.set_search_term("ord-1")
        twice = self.cache.set_search_term("ord-1")
        self.assertEqual(once, twice)
        self.assertEqual([o.order_id for o in twice], ["ORD-100"])

    def test_set_search_term_does_no_io(self):
        self.cache.load()
        self.store.reset_mock()
        self.cache.set_search_term("x")
        self.cache.set_search_term("")
        self.assertEqual(self.store.method_calls, [])

    def test_filtered_view_cannot_be_mutated_from_outside(self):
        self.cache.load()
        self.cache.filtered_orders.clear()
        self.cache.orders.clear()
        self.assertEqual(len(self.cache.filtered_orders), 3)
        self.assertEqual(len(self.cache.orders), 3)

    def test_get_by_identity(self):
        self.cache.load()
        self.assertEqual(self.cache.get("2").item_name, "Nut")
        self.assertIsNone(self.cache.get("99"))

    def test_remove_deletes_then_reloads(self):
        self.cache.load()
        self.store.list_orders.return_value = ORDERS[1:]

        ok, msg = self.cache.remove("1")

        self.assertTrue(ok)
        self.assertEqual(msg, "Order deleted")
        self.store.delete_order.assert_called_once_with("1")
        self.assertEqual([o.id for o in self.cache.orders], ["2", "3"])

    def test_remove_failure_is_not_optimistic(self):
        self.cache.load()
        self.store.list_orders.reset_mock()
        self.store.delete_order.side_effect = StoreError("not found", status_code=404)

        ok, msg = self.cache.remove("1")

        self.assertFalse(ok)
        self.assertIn("not found", msg)
        self.assertEqual(self.cache.orders, ORDERS)
        self.store.list_orders.assert_not_called()

    def test_remove_succeeds_even_if_reload_fails(self):
        self.cache.load()
        self.store.list_orders.side_effect = TransportError("timed out")

        ok, msg = self.cache.remove("1")

        self.assertTrue(ok)
        self.assertIn("could not be refreshed", msg)
        self.assertEqual(self.cache.orders, ORDERS)

    def test_reentrant_remove_is_rejected(self):
        self.cache.load()

        def delete_again(order_key):
            ok, msg = self.cache.remove(order_key)
            self.assertFalse(ok)
            self.assertIn("already", msg)

        self.store.delete_order.side_effect = delete_again

        ok, _ = self.cache.remove("1")

        self.assertTrue(ok)
        self.assertEqual(self.store.delete_order.call_count, 1)

    def test_reentrant_load_is_rejected(self):
        nested = []

        def list_again():
            nested.append(self.cache.load())
            return list(ORDERS)

        self.store.list_orders.side_effect = list_again

        ok, _ = self.cache.load()

        self.assertTrue(ok)
        self.assertFalse(nested[0][0])
        self.assertEqual(self.store.list_orders.call_count, 1)
