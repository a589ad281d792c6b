"""Invoices router - numbered invoices with computed totals."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.billing import InvoiceCreate, InvoiceRead, InvoiceUpdate
from freelancehub.services import (
    activity_service,
    client_service,
    invoice_service,
    project_service,
)

router = APIRouter()


def _link_not_found(e: Exception) -> HTTPException:
    if isinstance(e, client_service.ClientNotFoundError):
        return HTTPException(status_code=404, detail="Client not found")
    return HTTPException(status_code=404, detail="Project not found")


@router.get("", response_model=list[InvoiceRead])
def list_invoices(
    user: User = Depends(require_permission("invoices")),
    db: Session = Depends(get_db),
):
    return invoice_service.list_invoices(db, user.id)


@router.get("/{invoice_id}", response_model=InvoiceRead)
def get_invoice(
    invoice_id: UUID,
    user: User = Depends(require_permission("invoices")),
    db: Session = Depends(get_db),
):
    invoice = invoice_service.get_invoice(db, user.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


@router.post(
    "",
    response_model=InvoiceRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_invoice(
    data: InvoiceCreate,
    request: Request,
    user: User = Depends(require_permission("invoices")),
    db: Session = Depends(get_db),
):
    """Create an invoice; number, total and template variant are assigned here."""
    try:
        invoice = invoice_service.create_invoice(db, user.id, data)
    except (client_service.ClientNotFoundError, project_service.ProjectNotFoundError) as e:
        raise _link_not_found(e)
    db.commit()
    db.refresh(invoice)
    result = InvoiceRead.model_validate(invoice)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.CREATE_INVOICE,
        EntityType.INVOICE, result.id,
        {"invoice_number": result.invoice_number, "total_amount": str(result.total_amount)},
    )
    return result


@router.put(
    "/{invoice_id}",
    response_model=InvoiceRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_invoice(
    invoice_id: UUID,
    data: InvoiceUpdate,
    request: Request,
    user: User = Depends(require_permission("invoices")),
    db: Session = Depends(get_db),
):
    try:
        invoice = invoice_service.update_invoice(db, user.id, invoice_id, data)
    except invoice_service.InvoiceNotFoundError:
        raise HTTPException(status_code=404, detail="Invoice not found")
    except (client_service.ClientNotFoundError, project_service.ProjectNotFoundError) as e:
        raise _link_not_found(e)
    db.commit()
    db.refresh(invoice)
    result = InvoiceRead.model_validate(invoice)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.UPDATE_INVOICE,
        EntityType.INVOICE, invoice_id,
        {"fields": sorted(data.model_dump(exclude_unset=True)), "status": result.status.value},
    )
    return result


@router.delete(
    "/{invoice_id}", status_code=204, dependencies=[Depends(require_csrf_header)]
)
def delete_invoice(
    invoice_id: UUID,
    request: Request,
    user: User = Depends(require_permission("invoices")),
    db: Session = Depends(get_db),
):
    try:
        invoice_service.delete_invoice(db, user.id, invoice_id)
    except invoice_service.InvoiceNotFoundError:
        raise HTTPException(status_code=404, detail="Invoice not found")
    db.commit()

    activity_service.log_activity(
        db, request, user.id, ActivityAction.DELETE_INVOICE, EntityType.INVOICE, invoice_id
    )
    return Response(status_code=204)
