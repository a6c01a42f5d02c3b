# services/edit_session.py
"""
Edit session for a single order.

    Closed --begin_edit--> Editing --cancel / successful commit--> Closed

While Editing the session owns an OrderDraft. The draft is a value copy, so
the collection cache never sees an edit until it has been committed and the
cache reloaded. A failed commit keeps the session Editing with the draft as
the user left it.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from domain.models import (
    EDITABLE_FIELDS,
    PRICE_INPUT_FIELDS,
    STATUS,
    STATUS_VALUES,
    TOTAL_PRICE,
    DELIVERY_CHARGES,
    QUANTITY,
    UNIT_PRICE,
    Order,
    OrderDraft,
)
from order_store import OrderStoreClient, OrderStoreError
from utils.pricing import compute_total_price

logger = logging.getLogger(__name__)


class SessionState(Enum):
    CLOSED = "closed"
    EDITING = "editing"


class EditSessionError(ValueError):
    """An operation was called that the current session state doesn't allow"""


class EditSession:
    def __init__(
            self,
            store: OrderStoreClient,
            on_committed: Optional[Callable[[], Tuple[bool, str]]] = None,
    ):
        """
        Args:
            store: client used to submit the draft
            on_committed: called after a successful commit, normally the
                collection cache's `load`
        """
        self.store = store
        self.on_committed = on_committed
        self.state = SessionState.CLOSED
        self._draft: Optional[OrderDraft] = None
        self._submitting = False

    @property
    def is_editing(self) -> bool:
        return self.state is SessionState.EDITING

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def draft(self) -> Dict[str, str]:
        """Snapshot of the draft's field values."""
        self._require_editing("read the draft")
        return dict(self._draft.values)

    @property
    def order_key(self) -> str:
        self._require_editing("read the draft identity")
        return self._draft.order_key

    @property
    def source(self) -> Order:
        """The order as it was when editing began."""
        self._require_editing("read the source order")
        return self._draft.source

    def _require_editing(self, action: str) -> None:
        if not self.is_editing:
            raise EditSessionError(f"Cannot {action}: no order is being edited")

    def begin_edit(self, order: Order) -> None:
        if self.is_editing:
            if self._submitting:
                raise EditSessionError("Cannot start a new edit while an update is in progress")
            logger.warning(
                "Discarding unsaved draft of order %s to edit order %s",
                self._draft.order_key,
                order.id,
            )

        self._draft = OrderDraft.from_order(order)
        self.state = SessionState.EDITING
        logger.debug("Editing order %s", order.id)

    def set_field(self, name: str, value: str) -> None:
        self._require_editing(f"set {name}")

        if name == TOTAL_PRICE:
            raise EditSessionError(f"{TOTAL_PRICE} is derived and cannot be set directly")
        if name not in EDITABLE_FIELDS:
            raise EditSessionError(f"Unknown order field: {name}")

        text = "" if value is None else str(value)
        if name == STATUS and text not in STATUS_VALUES:
            raise EditSessionError(f"Unknown status {text!r}, expected one of {', '.join(STATUS_VALUES)}")

        self._draft.values[name] = text

        if name in PRICE_INPUT_FIELDS:
            self._recompute_total_price()

    def _recompute_total_price(self) -> None:
        values = self._draft.values
        values[TOTAL_PRICE] = compute_total_price(
            values[UNIT_PRICE],
            values[QUANTITY],
            values[DELIVERY_CHARGES],
        )

    def cancel(self) -> None:
        self._require_editing("cancel")
        if self._submitting:
            raise EditSessionError("Cannot cancel while an update is in progress")
        logger.debug("Edit of order %s cancelled", self._draft.order_key)
        self._draft = None
        self.state = SessionState.CLOSED

    def commit(self) -> Tuple[bool, str]:
        """
        Submit the draft as an update of its order.

        Returns (ok, message). On failure the session stays Editing and the
        draft is untouched.
        """
        self._require_editing("commit")
        if self._submitting:
            logger.warning("Update of order %s already in progress", self._draft.order_key)
            return False, "An update for this order is already in progress"

        order = self._draft.to_order()
        self._submitting = True
        try:
            self.store.update_order(order)
        except OrderStoreError as e:
            logger.error("Error updating order %s: %s", order.id, e)
            return False, f"Could not update order: {e.message}"
        finally:
            self._submitting = False

        logger.info("Order %s updated", order.id)
        self._draft = None
        self.state = SessionState.CLOSED

        if self.on_committed is not None:
            ok, msg = self.on_committed()
            if not ok:
                return True, f"Order updated, but the list could not be refreshed: {msg}"
        return True, "Order updated"
