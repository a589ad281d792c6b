"""Quotes router - same pattern as invoices with QUO numbering."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.billing import QuoteCreate, QuoteRead, QuoteUpdate
from freelancehub.services import (
    activity_service,
    client_service,
    project_service,
    quote_service,
)

router = APIRouter()


@router.get("", response_model=list[QuoteRead])
def list_quotes(
    user: User = Depends(require_permission("quotes")),
    db: Session = Depends(get_db),
):
    return quote_service.list_quotes(db, user.id)


@router.get("/{quote_id}", response_model=QuoteRead)
def get_quote(
    quote_id: UUID,
    user: User = Depends(require_permission("quotes")),
    db: Session = Depends(get_db),
):
    quote = quote_service.get_quote(db, user.id, quote_id)
    if not quote:
        raise HTTPException(status_code=404, detail="Quote not found")
    return quote


@router.post(
    "",
    response_model=QuoteRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_quote(
    data: QuoteCreate,
    request: Request,
    user: User = Depends(require_permission("quotes")),
    db: Session = Depends(get_db),
):
    try:
        quote = quote_service.create_quote(db, user.id, data)
    except client_service.ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")
    except project_service.ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    db.commit()
    db.refresh(quote)
    result = QuoteRead.model_validate(quote)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.CREATE_QUOTE,
        EntityType.QUOTE, result.id, {"quote_number": result.quote_number},
    )
    return result


@router.put(
    "/{quote_id}",
    response_model=QuoteRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_quote(
    quote_id: UUID,
    data: QuoteUpdate,
    request: Request,
    user: User = Depends(require_permission("quotes")),
    db: Session = Depends(get_db),
):
    try:
        quote = quote_service.update_quote(db, user.id, quote_id, data)
    except quote_service.QuoteNotFoundError:
        raise HTTPException(status_code=404, detail="Quote not found")
    except client_service.ClientNotFoundError:
        raise HTTPException(status_code=404, detail="Client not found")
    except project_service.ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    db.commit()
    db.refresh(quote)
    result = QuoteRead.model_validate(quote)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.UPDATE_QUOTE,
        EntityType.QUOTE, quote_id,
        {"fields": sorted(data.model_dump(exclude_unset=True))},
    )
    return result


@router.delete(
    "/{quote_id}", status_code=204, dependencies=[Depends(require_csrf_header)]
)
def delete_quote(
    quote_id: UUID,
    request: Request,
    user: User = Depends(require_permission("quotes")),
    db: Session = Depends(get_db),
):
    try:
        quote_service.delete_quote(db, user.id, quote_id)
    except quote_service.QuoteNotFoundError:
        raise HTTPException(status_code=404, detail="Quote not found")
    db.commit()

    activity_service.log_activity(
        db, request, user.id, ActivityAction.DELETE_QUOTE, EntityType.QUOTE, quote_id
    )
    return Response(status_code=204)
