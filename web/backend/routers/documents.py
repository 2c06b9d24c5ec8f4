#!/usr/bin/env python3
"""
Document endpoints - metadata records addressed by their own id.

Registering and listing go through /api/students/{id}/documents.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..services.student_service import StudentService
from ..models.responses import DeleteResponse, DocumentResponse

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(document_id: str, db: Session = Depends(get_db)):
    return DocumentResponse(success=True, document=StudentService(db).get_document(document_id))


@router.delete("/{document_id}", response_model=DeleteResponse)
def delete_document(document_id: str, db: Session = Depends(get_db)):
    StudentService(db).delete_document(document_id)
    return DeleteResponse(success=True, message="Document deleted")
