#!/usr/bin/env python3
"""
Student endpoints - CRUD and document metadata.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.assignment import AssignmentCoordinator
from ..dependencies import get_coordinator, get_db
from ..services.student_service import StudentService
from ..models.requests import DocumentCreate, StudentCreate, StudentUpdate
from ..models.responses import (
    DeleteResponse,
    DocumentResponse,
    DocumentsResponse,
    StudentDetailResponse,
    StudentResponse,
    StudentsResponse,
)

router = APIRouter(prefix="/api/students", tags=["students"])


@router.get("", response_model=StudentsResponse)
def list_students(
    stage: Optional[str] = Query(default=None, description="Workflow stage code"),
    status: Optional[str] = Query(default=None, description="Student status"),
    supervisor_id: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Name or thesis title"),
    db: Session = Depends(get_db)
):
    service = StudentService(db)
    students = service.list_students(stage=stage, status=status, supervisor_id=supervisor_id, search=search)
    return StudentsResponse(success=True, count=len(students), students=students)


@router.get("/{student_id}", response_model=StudentDetailResponse)
def get_student(student_id: str, db: Session = Depends(get_db)):
    """Get a student with their supervisor summary and documents."""
    service = StudentService(db)
    return StudentDetailResponse(success=True, student=service.get_student(student_id))


@router.post("", response_model=StudentResponse, status_code=201)
def create_student(payload: StudentCreate, db: Session = Depends(get_db)):
    service = StudentService(db)
    student = service.create_student(payload)
    return StudentResponse(success=True, message="Student created", student=student)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(student_id: str, payload: StudentUpdate, db: Session = Depends(get_db)):
    """
    Update a student's profile.

    The supervisor is not editable here; use the matching endpoints.
    """
    service = StudentService(db)
    student = service.update_student(student_id, payload)
    return StudentResponse(success=True, message="Student updated", student=student)


@router.delete("/{student_id}", response_model=DeleteResponse)
def delete_student(
    student_id: str,
    db: Session = Depends(get_db),
    coordinator: AssignmentCoordinator = Depends(get_coordinator)
):
    service = StudentService(db, coordinator=coordinator)
    removed = service.delete_student(student_id)
    return DeleteResponse(success=True, message=f"Student deleted ({removed} documents removed)")


@router.post("/{student_id}/documents", response_model=DocumentResponse, status_code=201)
def add_document(student_id: str, payload: DocumentCreate, db: Session = Depends(get_db)):
    """Register document metadata for a student."""
    service = StudentService(db)
    return DocumentResponse(success=True, document=service.add_document(student_id, payload))


@router.get("/{student_id}/documents", response_model=DocumentsResponse)
def list_documents(
    student_id: str,
    stage: Optional[str] = Query(default=None, description="Workflow stage code"),
    db: Session = Depends(get_db)
):
    documents = StudentService(db).list_documents(student_id, stage=stage)
    return DocumentsResponse(success=True, count=len(documents), documents=documents)
