"""Documents router - stored file metadata."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from freelancehub.core.deps import get_db, require_csrf_header, require_permission
from freelancehub.db.enums import ActivityAction, EntityType
from freelancehub.db.models import User
from freelancehub.schemas.document import DocumentCreate, DocumentRead
from freelancehub.services import (
    activity_service,
    client_service,
    document_service,
    invoice_service,
    project_service,
    quote_service,
)

router = APIRouter()

_LINK_ERRORS = {
    client_service.ClientNotFoundError: "Client not found",
    project_service.ProjectNotFoundError: "Project not found",
    invoice_service.InvoiceNotFoundError: "Invoice not found",
    quote_service.QuoteNotFoundError: "Quote not found",
}


@router.get("", response_model=list[DocumentRead])
def list_documents(
    doc_type: str | None = Query(None, alias="type"),
    client_id: UUID | None = Query(None, alias="clientId"),
    project_id: UUID | None = Query(None, alias="projectId"),
    user: User = Depends(require_permission("documents")),
    db: Session = Depends(get_db),
):
    return document_service.list_documents(
        db, user.id, doc_type=doc_type, client_id=client_id, project_id=project_id
    )


@router.post(
    "",
    response_model=DocumentRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_document(
    data: DocumentCreate,
    request: Request,
    user: User = Depends(require_permission("documents")),
    db: Session = Depends(get_db),
):
    try:
        document = document_service.create_document(db, user.id, data)
    except tuple(_LINK_ERRORS) as e:
        raise HTTPException(status_code=404, detail=_LINK_ERRORS[type(e)])
    db.commit()
    db.refresh(document)
    result = DocumentRead.model_validate(document)

    activity_service.log_activity(
        db, request, user.id, ActivityAction.CREATE_DOCUMENT,
        EntityType.DOCUMENT, result.id, {"name": result.name, "type": result.type},
    )
    return result


@router.delete(
    "/{document_id}", status_code=204, dependencies=[Depends(require_csrf_header)]
)
def delete_document(
    document_id: UUID,
    request: Request,
    user: User = Depends(require_permission("documents")),
    db: Session = Depends(get_db),
):
    try:
        document_service.delete_document(db, user.id, document_id)
    except document_service.DocumentNotFoundError:
        raise HTTPException(status_code=404, detail="Document not found")
    db.commit()

    activity_service.log_activity(
        db, request, user.id, ActivityAction.DELETE_DOCUMENT,
        EntityType.DOCUMENT, document_id,
    )
    return Response(status_code=204)
