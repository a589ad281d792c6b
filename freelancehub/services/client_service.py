"""Client service - CRUD for a freelancer's clients."""

from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.models import Client, Invoice, Quote
from freelancehub.schemas.client import ClientCreate, ClientUpdate


class ClientServiceError(Exception):
    """Base exception for client service errors."""

    pass


class ClientNotFoundError(ClientServiceError):
    """Client not found (or owned by another user)."""

    pass


class ClientInUseError(ClientServiceError):
    """Client still has invoices or quotes and cannot be deleted."""

    pass


def list_clients(db: Session, user_id: UUID) -> list[Client]:
    """List a user's clients, newest first."""
    return (
        db.query(Client)
        .filter(Client.user_id == user_id)
        .order_by(Client.created_at.desc())
        .all()
    )


def get_client(db: Session, user_id: UUID, client_id: UUID) -> Client | None:
    """Get a client scoped to its owner."""
    return (
        db.query(Client)
        .filter(Client.id == client_id, Client.user_id == user_id)
        .first()
    )


def require_client(db: Session, user_id: UUID, client_id: UUID) -> Client:
    client = get_client(db, user_id, client_id)
    if not client:
        raise ClientNotFoundError(f"Client {client_id} not found")
    return client


def create_client(db: Session, user_id: UUID, data: ClientCreate) -> Client:
    client = Client(user_id=user_id, **data.model_dump())
    db.add(client)
    db.flush()
    return client


def update_client(
    db: Session, user_id: UUID, client_id: UUID, data: ClientUpdate
) -> Client:
    client = require_client(db, user_id, client_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(client, field, value)
    db.flush()
    return client


def delete_client(db: Session, user_id: UUID, client_id: UUID) -> None:
    """
    Delete a client.

    Projects and documents keep existing with the client link cleared.
    Invoices and quotes are financial records, so a client that still has
    any cannot be deleted.
    """
    client = require_client(db, user_id, client_id)
    in_use = (
        db.query(Invoice.id).filter(Invoice.client_id == client.id).first()
        or db.query(Quote.id).filter(Quote.client_id == client.id).first()
    )
    if in_use:
        raise ClientInUseError("Client has invoices or quotes")
    db.delete(client)
    db.flush()
