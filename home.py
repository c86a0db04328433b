from __future__ import annotations

import streamlit as st

from core.config import get_settings
from core.errors import AuthError
from core.services.auth import Authenticator, pages_for_role
from core.services.items import low_stock_items
from core.store import get_store

st.title("🖨️ Print Shop Tracker")
st.caption("Daily production sheets, clients, paper stock, billing and cost reports.")

settings = get_settings()
store = get_store(settings.db_path)

with st.sidebar:
    st.subheader("Environment")
    st.write(f"**Data directory:** `{settings.data_dir}`")
    st.write(f"**Database:** `{settings.db_path.name}`")

role = st.session_state.get("role")

if not role:
    with st.form("login"):
        st.subheader("Sign in")
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")

    if submitted:
        try:
            r = Authenticator().authenticate(username, password)
            st.session_state["role"] = r.value
            st.session_state["username"] = username.strip()
            st.rerun()
        except AuthError as e:
            st.error(str(e))
    st.stop()

st.success(f"Signed in as **{st.session_state.get('username', '')}** ({role}).")
st.info(f"Screens available: {', '.join(pages_for_role(role))}. Use the left sidebar navigation.", icon="ℹ️")

low = low_stock_items(store)
if low:
    st.warning(
        "Low stock: " + ", ".join(f"{i.name} ({i.stock_qty} {i.uom})" for i in low),
        icon="⚠️",
    )

if st.button("Sign out"):
    for k in ("role", "username"):
        st.session_state.pop(k, None)
    st.rerun()
