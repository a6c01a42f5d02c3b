import streamlit as st

import config
from element_component import FLASH_STATE, confirm_delete_dialog, edit_order_dialog
from order_store import OrderStoreClient
from services.edit_session import EditSession
from services.order_collection import OrderCollectionCache
from utils.formatting import display_value
from utils.logger import setup_logging

st.set_page_config(page_title="Orders", page_icon="🧾", layout="wide")
st.sidebar.header("🧾 Orders")

# -----------------------------------------------------------------------------
# Session state: one cache + one edit session per browser session
# -----------------------------------------------------------------------------
if "order_cache" not in st.session_state:
    setup_logging(config.LOG_LEVEL, config.LOG_DIR)

    store = OrderStoreClient.from_env()
    cache = OrderCollectionCache(store)
    st.session_state["order_cache"] = cache
    st.session_state["edit_session"] = EditSession(store, on_committed=cache.load)
    st.session_state[FLASH_STATE] = None

    ok, msg = cache.load()
    if not ok:
        st.session_state[FLASH_STATE] = (False, msg)

cache: OrderCollectionCache = st.session_state["order_cache"]
edit_session: EditSession = st.session_state["edit_session"]

# -----------------------------------------------------------------------------
# Search + refresh
# -----------------------------------------------------------------------------
SEARCH_KEY = "order_search"


def refresh_orders(order_cache: OrderCollectionCache):
    ok, msg = order_cache.load()
    if not ok:
        st.session_state[FLASH_STATE] = (False, msg)


# A fresh snapshot shows all orders again, so the search box starts empty
if st.session_state.get("orders_generation") != cache.generation:
    st.session_state["orders_generation"] = cache.generation
    st.session_state[SEARCH_KEY] = cache.search_term

col_search, col_refresh = st.columns([5, 1])

with col_search:
    search_term = st.text_input(
        "Search by Order ID",
        key=SEARCH_KEY,
        placeholder="🔍 Search by Order ID",
        label_visibility="collapsed",
    )
with col_refresh:
    st.button("Refresh", use_container_width=True, on_click=refresh_orders, args=(cache,))

cache.set_search_term(search_term)

flash = st.session_state.get(FLASH_STATE)
if flash:
    ok, msg = flash
    if ok:
        st.success(msg)
    else:
        st.error(msg)
    st.session_state[FLASH_STATE] = None

# -----------------------------------------------------------------------------
# Order cards
# -----------------------------------------------------------------------------
if not cache.orders:
    if cache.loaded:
        st.info("No orders yet.")
    st.stop()

orders = cache.filtered_orders
if not orders:
    st.warning(f"No order ID matches '{search_term}'.")
    st.stop()

cols = st.columns(3)

for i, order in enumerate(orders):
    with cols[i % 3]:
        with st.container(border=True):
            marker = "✅" if order.is_approved else "⏳"
            st.markdown(f"#### {display_value(order.item_name)} {marker}")
            st.write(f"Order ID: {display_value(order.order_id)}")
            st.write(f"Quantity: {display_value(order.quantity)}")
            st.write(f"Supplier: {display_value(order.supplier_name)}")
            st.write(f"Unit Price: {display_value(order.unit_price)}")
            st.write(f"Delivery Charges: {display_value(order.delivery_charges)}")
            st.write(f"Total Price: {display_value(order.total_price)}")

            col_edit, col_delete = st.columns(2)
            with col_edit:
                if st.button("Edit", type="primary", key=f"edit_{order.id}"):
                    edit_session.begin_edit(order)
                    edit_order_dialog(edit_session)
            with col_delete:
                if st.button("Delete", key=f"delete_{order.id}"):
                    confirm_delete_dialog(cache, order)
