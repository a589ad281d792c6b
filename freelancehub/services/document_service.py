"""Document service - metadata for stored files."""

from uuid import UUID

from sqlalchemy.orm import Session

from freelancehub.db.models import Document
from freelancehub.schemas.document import DocumentCreate
from freelancehub.services import invoice_service, quote_service
from freelancehub.services.billing_common import check_links


class DocumentServiceError(Exception):
    """Base exception for document service errors."""

    pass


class DocumentNotFoundError(DocumentServiceError):
    """Document not found (or owned by another user)."""

    pass


def list_documents(
    db: Session,
    user_id: UUID,
    doc_type: str | None = None,
    client_id: UUID | None = None,
    project_id: UUID | None = None,
) -> list[Document]:
    """List a user's documents, newest first, with optional filters."""
    query = db.query(Document).filter(Document.user_id == user_id)
    if doc_type:
        query = query.filter(Document.type == doc_type)
    if client_id:
        query = query.filter(Document.client_id == client_id)
    if project_id:
        query = query.filter(Document.project_id == project_id)
    return query.order_by(Document.created_at.desc()).all()


def create_document(db: Session, user_id: UUID, data: DocumentCreate) -> Document:
    """Register document metadata; every linked record must belong to the user."""
    check_links(db, user_id, data.client_id, data.project_id)
    if data.invoice_id:
        invoice_service.require_invoice(db, user_id, data.invoice_id)
    if data.quote_id:
        quote_service.require_quote(db, user_id, data.quote_id)

    document = Document(user_id=user_id, **data.model_dump())
    db.add(document)
    db.flush()
    return document


def delete_document(db: Session, user_id: UUID, document_id: UUID) -> None:
    document = (
        db.query(Document)
        .filter(Document.id == document_id, Document.user_id == user_id)
        .first()
    )
    if not document:
        raise DocumentNotFoundError(f"Document {document_id} not found")
    db.delete(document)
    db.flush()
