"""
Document Routes (MongoDB `documents` collection)

POST /documents - Create document record
GET /documents - List documents (filters: collegeId, type, searchTerm)
DELETE /documents/{id} - Delete document (vendor admins only)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from trainermatch.api.deps import get_document_service
from trainermatch.core.auth import require_roles
from trainermatch.models import UserRole
from trainermatch.services.document_service import DocumentService
from trainermatch.schemas.schemas import DocumentCreate, DocumentResponse, MessageResponse

router = APIRouter(prefix="/documents", tags=["Documents"])

DOCUMENT_ROLES = (UserRole.VENDOR_ADMIN, UserRole.VENDOR_USER, UserRole.TRAINER)


@router.post("", response_model=DocumentResponse, status_code=201)
async def create_document(
    data: DocumentCreate,
    user: dict = Depends(require_roles(*DOCUMENT_ROLES)),
    service: DocumentService = Depends(get_document_service)
):
    return service.create(data)


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    college_id: Optional[str] = Query(None, alias="collegeId"),
    doc_type: Optional[str] = Query(None, alias="type", description="Document type, or ALL"),
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    user: dict = Depends(require_roles(*DOCUMENT_ROLES)),
    service: DocumentService = Depends(get_document_service)
):
    """
    List documents, newest first.

    searchTerm matches title or folder name, case-insensitive.
    Each document carries its college / trainer / requirement summary.
    """
    return service.find_all(college_id=college_id, doc_type=doc_type, search_term=search_term)


@router.delete("/{document_id}", response_model=MessageResponse)
async def delete_document(
    document_id: str,
    user: dict = Depends(require_roles(UserRole.VENDOR_ADMIN)),
    service: DocumentService = Depends(get_document_service)
):
    service.delete(document_id)
    return MessageResponse(message="Document deleted")
