# order_store.py
"""
HTTP client for the remote order collection.

    GET    /orders        -> list of order records
    PUT    /orders/{id}   -> replace one record
    DELETE /orders/{id}   -> remove one record

Every failure is raised as an OrderStoreError subclass: TransportError when
the store couldn't be reached or answered with something unreadable,
StoreError when it answered and rejected the request.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

import config
from domain.models import Order

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_MULTIPLE_CHOICES = 300


class OrderStoreError(Exception):
    """Base class for remote order store failures"""

    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Any = None):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)


class TransportError(OrderStoreError):
    """Network unreachable, timeout, or an unreadable response"""


class StoreError(OrderStoreError):
    """The store rejected the request (unknown id, validation failure, ...)"""


class OrderStoreClient:
    def __init__(
            self,
            base_url: str,
            timeout: float = 10.0,
            session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "OrderStoreClient":
        return cls(
            base_url=config.ORDERS_API_URL,
            timeout=config.ORDERS_API_TIMEOUT,
        )

    def _url(self, order_key: Optional[str] = None) -> str:
        if order_key is None:
            return f"{self.base_url}/orders"
        return f"{self.base_url}/orders/{quote(str(order_key), safe='')}"

    def _request(self, method: str, url: str, **kwargs) -> Any:
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.Timeout as e:
            raise TransportError(f"{method} {url} timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        data = None
        if resp.content:
            try:
                data = resp.json()
            except ValueError:
                data = resp.text

        if not (HTTP_OK <= resp.status_code < HTTP_MULTIPLE_CHOICES):
            detail = data.get("message") if isinstance(data, dict) else None
            message = f"{method} {url} rejected with HTTP {resp.status_code}"
            if detail:
                message = f"{message}: {detail}"
            raise StoreError(message, status_code=resp.status_code, response_data=data)

        return data

    def list_orders(self) -> List[Order]:
        data = self._request("GET", self._url())
        if not isinstance(data, list):
            raise TransportError(
                f"Expected a list of orders, got {type(data).__name__}",
                response_data=data,
            )
        try:
            return [Order.from_wire(row) for row in data]
        except (TypeError, ValueError, AttributeError) as e:
            raise TransportError(f"Malformed order record: {e}", response_data=data) from e

    def update_order(self, order: Order) -> Optional[Dict[str, Any]]:
        """Send the full order body; returns whatever the store echoes back."""
        return self._request("PUT", self._url(order.id), json=order.to_wire())

    def delete_order(self, order_key: str) -> None:
        self._request("DELETE", self._url(order_key))
