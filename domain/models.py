# domain/models.py

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Tuple


class OrderStatus(Enum):
    """Status values recognised by the edit form"""
    PENDING = "pending"
    APPROVED = "approved"

    @property
    def label(self) -> str:
        return self.value.title()


STATUS_VALUES: Tuple[str, ...] = tuple(s.value for s in OrderStatus)

# Wire field names
ITEM_NAME = "itemName"
QUANTITY = "quantity"
SUPPLIER_NAME = "supplierName"
UNIT_PRICE = "unitPrice"
DELIVERY_CHARGES = "deliveryCharges"
TOTAL_PRICE = "totalPrice"
STATUS = "status"
ORDER_ID = "orderId"

EDITABLE_FIELDS: Tuple[str, ...] = (
    ITEM_NAME,
    QUANTITY,
    SUPPLIER_NAME,
    UNIT_PRICE,
    DELIVERY_CHARGES,
    TOTAL_PRICE,
    STATUS,
)

# Changing any of these recomputes totalPrice
PRICE_INPUT_FIELDS: Tuple[str, ...] = (UNIT_PRICE, QUANTITY, DELIVERY_CHARGES)

# Identity keys accepted on read, in order of preference
IDENTITY_KEYS: Tuple[str, ...] = ("_id", "id")

_ATTR_BY_FIELD = {
    ITEM_NAME: "item_name",
    QUANTITY: "quantity",
    SUPPLIER_NAME: "supplier_name",
    UNIT_PRICE: "unit_price",
    DELIVERY_CHARGES: "delivery_charges",
    TOTAL_PRICE: "total_price",
    STATUS: "status",
}

_KNOWN_KEYS = set(IDENTITY_KEYS) | set(EDITABLE_FIELDS) | {ORDER_ID}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class Order:
    """
    One purchase order as held by the remote store.

    Editable fields are kept as text so a draft can carry exactly what the
    user typed. `extra` holds any wire keys this app doesn't know about
    (timestamps, version keys); they are sent back untouched on update.
    """
    id: str
    order_id: str
    item_name: str = ""
    quantity: str = ""
    supplier_name: str = ""
    unit_price: str = ""
    delivery_charges: str = ""
    total_price: str = ""
    status: str = OrderStatus.PENDING.value
    id_field: str = "_id"
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Order":
        id_field = next((k for k in IDENTITY_KEYS if data.get(k) is not None), None)
        if id_field is None:
            raise ValueError(f"Order record has no identity field ({', '.join(IDENTITY_KEYS)}): {data!r}")

        values = {attr: _as_text(data.get(name)) for name, attr in _ATTR_BY_FIELD.items()}
        if not values["status"]:
            values["status"] = OrderStatus.PENDING.value

        return cls(
            id=_as_text(data[id_field]),
            order_id=_as_text(data.get(ORDER_ID)),
            id_field=id_field,
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
            **values,
        )

    def to_wire(self) -> Dict[str, Any]:
        """Full order-shaped body, as accepted by PUT /orders/{id}."""
        body: Dict[str, Any] = dict(self.extra)
        body[self.id_field] = self.id
        body[ORDER_ID] = self.order_id
        body.update(self.editable_values())
        return body

    def editable_values(self) -> Dict[str, str]:
        return {name: getattr(self, attr) for name, attr in _ATTR_BY_FIELD.items()}

    def with_values(self, values: Dict[str, str]) -> "Order":
        unknown = set(values) - set(_ATTR_BY_FIELD)
        if unknown:
            raise KeyError(f"Not editable order fields: {sorted(unknown)}")
        return replace(
            self,
            extra=dict(self.extra),
            **{_ATTR_BY_FIELD[name]: _as_text(v) for name, v in values.items()},
        )

    @property
    def is_approved(self) -> bool:
        return self.status == OrderStatus.APPROVED.value


@dataclass
class OrderDraft:
    """
    Mutable copy of one order's editable fields, owned by an edit session.
    `source` is the order as it was when editing began.
    """
    source: Order
    values: Dict[str, str]

    @classmethod
    def from_order(cls, order: Order) -> "OrderDraft":
        return cls(source=order, values=dict(order.editable_values()))

    @property
    def order_key(self) -> str:
        return self.source.id

    def to_order(self) -> Order:
        return self.source.with_values(self.values)
