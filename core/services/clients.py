from __future__ import annotations

import logging
from typing import Optional

from core.errors import NotFoundError, ValidationError
from core.models import Client
from core.store import CLIENT_COUNTER, CLIENTS_KEY, KeyValueStore

logger = logging.getLogger(__name__)


def _clean(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s if s else None


def list_clients(store: KeyValueStore) -> list[Client]:
    return [Client.from_dict(d) for d in store.get(CLIENTS_KEY, [])]


def list_active_clients(store: KeyValueStore) -> list[Client]:
    return [c for c in list_clients(store) if c.is_active]


def get_client(store: KeyValueStore, client_id: int) -> Optional[Client]:
    return next((c for c in list_clients(store) if c.id == int(client_id)), None)


def search_clients(store: KeyValueStore, term: str) -> list[Client]:
    t = str(term or "").strip().lower()
    return [c for c in list_clients(store) if t in c.name.lower()]


def validate_client_input(name: Optional[str]) -> str:
    n = _clean(name)
    if not n:
        raise ValidationError("Client name is required.")
    return n


def add_client(
    store: KeyValueStore,
    *,
    name: str,
    phone: Optional[str] = None,
    billing_name: Optional[str] = None,
) -> Client:
    clients = store.get(CLIENTS_KEY, [])
    client = Client(
        id=store.next_id(CLIENT_COUNTER),
        name=str(name).strip(),
        phone=_clean(phone),
        billing_name=_clean(billing_name),
        is_active=True,
    )
    clients.append(client.to_dict())
    store.set(CLIENTS_KEY, clients)
    logger.info("Client added: id=%s name=%r", client.id, client.name)
    return client


def update_client(store: KeyValueStore, client: Client) -> Client:
    clients = store.get(CLIENTS_KEY, [])
    for i, d in enumerate(clients):
        if int(d.get("id", 0)) == int(client.id):
            clients[i] = client.to_dict()
            store.set(CLIENTS_KEY, clients)
            logger.info("Client updated: id=%s active=%s", client.id, client.is_active)
            return client
    raise NotFoundError(f"Client {client.id} not found.")


def set_client_active(store: KeyValueStore, client_id: int, active: bool) -> Client:
    # Clients are never deleted; deactivation hides them from the daily sheet.
    client = get_client(store, client_id)
    if client is None:
        raise NotFoundError(f"Client {client_id} not found.")
    client.is_active = bool(active)
    return update_client(store, client)
