"""Clients router - CRUD for the user's clients."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.client import ClientCreate, ClientRead, ClientUpdate
from freelancehub.services import activity_service, client_service

router = APIRouter()


@router.get("", response_model=list[ClientRead])
def list_clients(
    user: User = Depends(require_permission("clients")),
    db: Session = Depends(get_db),
):
    return client_service.list_clients(db, user.id)


@router.get("/{client_id}", response_model=ClientRead)
def get_client(
    client_id: UUID,
    user: User = Depends(require_permission("clients")),
    db: Session = Depends(get_db),
):
    client = client_service.get_client(db, user.id, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.post(
    "",
    response_model=ClientRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_client(
    data: ClientCreate,
    request: Request,
    user: User = Depends(require_permission("clients")),
    db: Session = Depends(get_db),
):
    client = client_service.create_client(db, user.id, data)
    db.commit()
    db.refresh(client)
    result = ClientRead.model_validate(client)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.CREATE_CLIENT,
        EntityType.CLIENT, client.id, {"name": client.name},
    )
    return result


@router.put(
    "/{client_id}",
    response_model=ClientRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_client(
    client_id: UUID,
    data: ClientUpdate,
    request: Request,
    user: User = Depends(require_permission("clients")),
    db: Session = Depends(get_db),
):
    try:
        client = client_service.update_client(db, user.id, client_id, data)
    except client_service.ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")
    db.commit()
    db.refresh(client)
    result = ClientRead.model_validate(client)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.UPDATE_CLIENT,
        EntityType.CLIENT, client_id,
        {"fields": sorted(data.model_dump(exclude_unset=True))},
    )
    return result


@router.delete(
    "/{client_id}", status_code=204, dependencies=[Depends(require_csrf_header)]
)
def delete_client(
    client_id: UUID,
    request: Request,
    user: User = Depends(require_permission("clients")),
    db: Session = Depends(get_db),
):
    try:
        client_service.delete_client(db, user.id, client_id)
    except client_service.ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")
    except client_service.ClientInUseError:
        raise HTTPException(
            status_code=409, detail="Client has invoices or quotes and cannot be deleted"
        )
    db.commit()

    activity_service.log_activity(
        db, request, user.id, ActivityAction.DELETE_CLIENT, EntityType.CLIENT, client_id
    )
    return Response(status_code=204)
