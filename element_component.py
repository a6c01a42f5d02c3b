import streamlit as st
import pandas as pd

from domain.models import (
    DELIVERY_CHARGES,
    ITEM_NAME,
    QUANTITY,
    STATUS,
    STATUS_VALUES,
    SUPPLIER_NAME,
    TOTAL_PRICE,
    UNIT_PRICE,
    Order,
    OrderStatus,
)
from services.edit_session import EditSession
from services.order_collection import OrderCollectionCache

FLASH_STATE = "orders_flash"

TEXT_FIELDS = [
    (ITEM_NAME, "Item Name"),
    (QUANTITY, "Quantity"),
    (SUPPLIER_NAME, "Supplier Name"),
    (UNIT_PRICE, "Unit Price"),
    (DELIVERY_CHARGES, "Delivery Charges"),
]


def _status_label(value: str) -> str:
    return OrderStatus(value).label


@st.dialog("Edit Order")
def edit_order_dialog(edit_session: EditSession):
    if not edit_session.is_editing:
        st.rerun()

    order_key = edit_session.order_key
    st.caption(f"Order ID: {edit_session.source.order_id}")

    def widget_key(name: str) -> str:
        return f"draft_{order_key}_{name}"

    def on_change(name: str):
        edit_session.set_field(name, st.session_state[widget_key(name)])

    draft = edit_session.draft

    # numeric fields stay text inputs so partial input like "12." survives
    for name, label in TEXT_FIELDS:
        st.text_input(
            label,
            value=draft[name],
            key=widget_key(name),
            on_change=on_change,
            args=(name,),
        )

    st.text_input("Total Price", value=draft[TOTAL_PRICE], disabled=True)

    st.selectbox(
        "Status",
        STATUS_VALUES,
        index=STATUS_VALUES.index(draft[STATUS]) if draft[STATUS] in STATUS_VALUES else None,
        format_func=_status_label,
        key=widget_key(STATUS),
        on_change=on_change,
        args=(STATUS,),
    )

    col_cancel, col_update = st.columns(2)

    with col_cancel:
        if st.button("Cancel", key="edit_cancel", disabled=edit_session.is_submitting):
            edit_session.cancel()
            st.rerun()
    with col_update:
        if st.button("Update", type="primary", key="edit_update", disabled=edit_session.is_submitting):
            ok, msg = edit_session.commit()
            if ok:
                st.session_state[FLASH_STATE] = (True, msg)
                st.rerun()
            else:
                st.error(msg)


@st.dialog("Confirm Delete")
def confirm_delete_dialog(cache: OrderCollectionCache, order: Order):
    st.write(f"Delete order **{order.order_id}**?")

    df = pd.DataFrame(
        [
            ("Order ID", order.order_id),
            ("Item", order.item_name),
            ("Supplier", order.supplier_name),
            ("Quantity", order.quantity),
            ("Total Price", order.total_price),
            ("Status", order.status),
        ],
        columns=["Field", "Value"],
    )
    df["Value"] = df["Value"].astype("string")
    st.dataframe(df, hide_index=True, use_container_width=True)

    col_yes, col_no = st.columns(2)

    with col_yes:
        if st.button("Delete", type="primary", key="confirm_delete"):
            ok, msg = cache.remove(order.id)
            if ok:
                st.session_state[FLASH_STATE] = (True, msg)
                st.rerun()
            else:
                st.error(msg)
    with col_no:
        if st.button("Cancel", key="confirm_keep"):
            st.rerun()
