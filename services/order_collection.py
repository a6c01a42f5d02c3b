# services/order_collection.py
import logging
from typing import List, Set, Tuple

from domain.models import Order
from order_store import OrderStoreClient, OrderStoreError

logger = logging.getLogger(__name__)


def filter_orders(orders: List[Order], term: str) -> List[Order]:
    """
    Orders whose orderId contains `term`, case-insensitively, in their
    list order. An empty term keeps everything.
    """
    needle = term.casefold()
    if not needle:
        return list(orders)
    return [o for o in orders if needle in o.order_id.casefold()]


class OrderCollectionCache:
    """
    Last-fetched snapshot of all orders plus the view filtered by orderId.

    The filtered view is only ever re-derived from (orders, search_term).
    Remote failures leave the snapshot as it was and come back as
    (ok, message) so the page can show them.
    """

    def __init__(self, store: OrderStoreClient):
        self.store = store
        self._orders: List[Order] = []
        self._filtered: List[Order] = []
        self._search_term = ""
        self._loading = False
        self._deleting: Set[str] = set()
        self.loaded = False
        # bumped on every successful load, so callers can tell a fresh snapshot
        self.generation = 0

    @property
    def orders(self) -> List[Order]:
        return list(self._orders)

    @property
    def filtered_orders(self) -> List[Order]:
        return list(self._filtered)

    @property
    def search_term(self) -> str:
        return self._search_term

    def get(self, order_key: str) -> Order | None:
        return next((o for o in self._orders if o.id == order_key), None)

    def load(self) -> Tuple[bool, str]:
        """Replace the snapshot with the store's current orders and show all of them."""
        if self._loading:
            logger.warning("Order reload requested while one is already running")
            return False, "Orders are already being loaded"

        self._loading = True
        try:
            orders = self.store.list_orders()
        except OrderStoreError as e:
            logger.error("Error fetching orders: %s", e)
            return False, f"Could not load orders: {e.message}"
        finally:
            self._loading = False

        self._orders = orders
        self._search_term = ""
        self._filtered = list(orders)
        self.loaded = True
        self.generation += 1
        logger.info("Loaded %d orders", len(orders))
        return True, f"Loaded {len(orders)} orders"

    def set_search_term(self, term: str) -> List[Order]:
        self._search_term = term or ""
        self._filtered = filter_orders(self._orders, self._search_term)
        return self.filtered_orders

    def remove(self, order_key: str) -> Tuple[bool, str]:
        """
        Delete an order remotely, then reload. Nothing is removed locally
        until the store confirms.
        """
        if order_key in self._deleting:
            logger.warning("Delete of order %s requested while one is already running", order_key)
            return False, "This order is already being deleted"

        self._deleting.add(order_key)
        try:
            self.store.delete_order(order_key)
        except OrderStoreError as e:
            logger.error("Error deleting order %s: %s", order_key, e)
            return False, f"Could not delete order: {e.message}"
        finally:
            self._deleting.discard(order_key)

        logger.info("Order %s deleted", order_key)

        ok, msg = self.load()
        if not ok:
            return True, f"Order deleted, but the list could not be refreshed: {msg}"
        return True, "Order deleted"
