from __future__ import annotations

import streamlit as st

from core.config import get_settings
from core.logging_config import setup_logging
from core.models import Role
from core.services.auth import (
    PAGE_ACCOUNTS,
    PAGE_CLIENTS,
    PAGE_DAILY_ENTRY,
    PAGE_DASHBOARD,
    PAGE_DATA,
    PAGE_ITEMS,
    PAGE_REPORTS,
    pages_for_role,
)
from core.services.demo_data import init_database
from core.store import get_store

st.set_page_config(page_title="Print Shop Tracker", page_icon="🖨️", layout="wide")

settings = get_settings()
setup_logging(settings.log_dir)
init_database(get_store(settings.db_path))

PAGE_FILES = {
    PAGE_DAILY_ENTRY: ("pages/1_🖨️_Daily_Entry.py", "🖨️"),
    PAGE_CLIENTS: ("pages/2_👥_Clients.py", "👥"),
    PAGE_ITEMS: ("pages/3_📦_Items_Stock.py", "📦"),
    PAGE_REPORTS: ("pages/4_📊_Reports.py", "📊"),
    PAGE_ACCOUNTS: ("pages/5_💰_Accounts.py", "💰"),
    PAGE_DASHBOARD: ("pages/6_📈_Dashboard.py", "📈"),
    PAGE_DATA: ("pages/7_🧪_Data_Management.py", "🧪"),
}

pages = [st.Page("home.py", title="Home", icon="🏠", default=True)]
role = st.session_state.get("role")
if role:
    for title in pages_for_role(Role(role)):
        path, icon = PAGE_FILES[title]
        pages.append(st.Page(path, title=title, icon=icon))

st.navigation(pages).run()
