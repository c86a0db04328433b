from __future__ import annotations

import logging
from typing import Mapping, Optional

from core.errors import AuthError
from core.models import Role

logger = logging.getLogger(__name__)

# Shop-floor logins. The role only drives what the screens show; it is not a
# security boundary.
DEFAULT_CREDENTIALS: dict[str, tuple[str, Role]] = {
    "admin": ("admin", Role.ADMIN),
    "print01": ("print01", Role.DESIGNER),
    "accounts": ("accounts", Role.ACCOUNTS),
}

PAGE_DAILY_ENTRY = "Daily Entry"
PAGE_CLIENTS = "Clients"
PAGE_ITEMS = "Items / Stock"
PAGE_REPORTS = "Reports"
PAGE_ACCOUNTS = "Accounts"
PAGE_DASHBOARD = "Dashboard"
PAGE_DATA = "Data Management"

ROLE_PAGES: dict[Role, tuple[str, ...]] = {
    Role.ADMIN: (
        PAGE_DAILY_ENTRY, PAGE_CLIENTS, PAGE_ITEMS, PAGE_REPORTS,
        PAGE_ACCOUNTS, PAGE_DASHBOARD, PAGE_DATA,
    ),
    Role.DESIGNER: (PAGE_DAILY_ENTRY, PAGE_CLIENTS, PAGE_ITEMS, PAGE_REPORTS),
    Role.ACCOUNTS: (PAGE_ACCOUNTS, PAGE_DASHBOARD, PAGE_REPORTS),
}


class Authenticator:
    def __init__(self, credentials: Optional[Mapping[str, tuple[str, Role]]] = None):
        self._credentials = dict(DEFAULT_CREDENTIALS if credentials is None else credentials)

    def authenticate(self, username: str, password: str) -> Role:
        entry = self._credentials.get(str(username or "").strip())
        if entry is None or entry[0] != password:
            logger.warning("Failed login for %r", username)
            raise AuthError("Invalid username or password.")
        logger.info("Login: %s as %s", username, entry[1].value)
        return entry[1]


def pages_for_role(role: Role) -> tuple[str, ...]:
    return ROLE_PAGES.get(Role(role), ())


def can_edit_day(role: Role, finalized: bool) -> bool:
    # A finalized day is locked for everyone except Admin.
    return not finalized or Role(role) == Role.ADMIN


def can_edit_billing(role: Role, bill_no: Optional[str]) -> bool:
    # Accounts cannot change a job once it carries a bill number.
    return not (Role(role) == Role.ACCOUNTS and bool(bill_no))
