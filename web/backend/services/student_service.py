#!/usr/bin/env python3
"""
Student service - business logic for student records and their documents.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from core.assignment import AssignmentCoordinator
from core.errors import ConflictError, NotFoundError
from core.matching import normalize_tags
from database.models import Student, StudentStatus, DEFAULT_PROGRAMME, INITIAL_STAGE
from database.repositories import DocumentRepository, StudentRepository, SupervisorRepository
from ..models.requests import DocumentCreate, StudentCreate, StudentUpdate
from ..models.responses import DocumentOut, StudentDetail, StudentOut, SupervisorRef
from ..utils import safe_datetime_iso

logger = logging.getLogger(__name__)

NULLABLE_TEXT_FIELDS = {
    'thesis_title', 'project_summary', 'research_question', 'immersion_place', 'remarks',
}


class StudentService:
    """Service for managing students."""

    def __init__(self, db: Session, coordinator: Optional[AssignmentCoordinator] = None):
        self.db = db
        self.students = StudentRepository(db)
        self.supervisors = SupervisorRepository(db)
        self.documents = DocumentRepository(db)
        self.coordinator = coordinator

    def list_students(
        self,
        stage: Optional[str] = None,
        status: Optional[str] = None,
        supervisor_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[StudentOut]:
        """
        Get students with optional filters.

        Args:
            stage: Workflow stage code.
            status: Student status.
            supervisor_id: Assigned supervisor.
            search: Substring of last name, first name or thesis title.

        Returns:
            List of students with their supervisor reference.
        """
        students = self.students.search(stage=stage, status=status, supervisor_id=supervisor_id, text=search)
        supervisors = {s.id: s for s in self.supervisors.find_all()}
        return [self._to_student_out(s, supervisors.get(s.supervisor_id)) for s in students]

    def get_student(self, student_id: str) -> StudentDetail:
        student = self._get(student_id)
        supervisor = self.supervisors.find_by_id(student.supervisor_id)
        documents = self.documents.find_by_student(student_id)

        return StudentDetail(
            **self._to_student_out(student, supervisor).model_dump(),
            documents=[to_document_out(d) for d in documents],
        )

    def create_student(self, payload: StudentCreate) -> StudentOut:
        """New students always start unassigned, PENDING, at the first stage."""
        email = payload.email.strip().lower()
        if self.students.find_by_email(email):
            raise ConflictError("A student with this email already exists")

        student = self.students.create(
            last_name=payload.last_name,
            first_name=payload.first_name,
            email=email,
            programme=payload.programme or DEFAULT_PROGRAMME,
            year=payload.year,
            thesis_title=payload.thesis_title,
            project_summary=payload.project_summary,
            research_question=payload.research_question,
            immersion_place=payload.immersion_place,
            remarks=payload.remarks,
            domains=normalize_tags(payload.domains),
            supervisor_id=None,
            current_stage=INITIAL_STAGE,
            status=StudentStatus.PENDING.value,
        )
        self.db.commit()

        logger.info(f"Created student {student.id} ({email})")
        return self._to_student_out(student, None)

    def update_student(self, student_id: str, payload: StudentUpdate) -> StudentOut:
        self._get(student_id)
        updates = payload.model_dump(exclude_unset=True)

        if updates.get('email') is not None:
            email = updates['email'].strip().lower()
            duplicate = self.students.find_one(Student.email == email, Student.id != student_id)
            if duplicate:
                raise ConflictError("This email is already in use")
            updates['email'] = email
        if 'domains' in updates:
            updates['domains'] = normalize_tags(updates['domains'])

        updates = {k: v for k, v in updates.items() if v is not None or k in NULLABLE_TEXT_FIELDS}

        student = self.students.update(student_id, updates)
        self.db.commit()

        supervisor = self.supervisors.find_by_id(student.supervisor_id)
        return self._to_student_out(student, supervisor)

    def delete_student(self, student_id: str) -> int:
        """Delete through the coordinator so the supervisor slot is released."""
        return self.coordinator.delete_student(student_id)

    def add_document(self, student_id: str, payload: DocumentCreate) -> DocumentOut:
        """Register metadata of a document handed in by the student."""
        self._get(student_id)
        document = self.documents.create(
            student_id=student_id,
            file_name=payload.file_name,
            doc_type=payload.doc_type,
            stage=payload.stage,
            comment=payload.comment,
        )
        self.db.commit()
        return to_document_out(document)

    def list_documents(self, student_id: str, stage: Optional[str] = None) -> List[DocumentOut]:
        self._get(student_id)
        return [to_document_out(d) for d in self.documents.find_by_student(student_id, stage=stage)]

    def get_document(self, document_id: str) -> DocumentOut:
        return to_document_out(self._get_document(document_id))

    def delete_document(self, document_id: str) -> None:
        """Remove a document record; the stored file is not touched."""
        document = self._get_document(document_id)
        student_id = document.student_id
        self.documents.delete(document_id)
        self.db.commit()
        logger.info(f"Deleted document {document_id} of student {student_id}")

    # Private helper methods

    def _get(self, student_id: str) -> Student:
        student = self.students.find_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def _get_document(self, document_id: str):
        document = self.documents.find_by_id(document_id)
        if not document:
            raise NotFoundError(f"Document {document_id} not found")
        return document

    def _to_student_out(self, student: Student, supervisor) -> StudentOut:
        """Convert ORM model to StudentOut response model."""
        return StudentOut(
            id=student.id,
            last_name=student.last_name,
            first_name=student.first_name,
            email=student.email,
            programme=student.programme,
            year=student.year,
            thesis_title=student.thesis_title,
            project_summary=student.project_summary,
            research_question=student.research_question,
            immersion_place=student.immersion_place,
            remarks=student.remarks,
            domains=list(student.domains or []),
            supervisor_id=student.supervisor_id,
            supervisor=SupervisorRef(
                id=supervisor.id,
                last_name=supervisor.last_name,
                first_name=supervisor.first_name,
                email=supervisor.email,
            ) if supervisor else None,
            current_stage=student.current_stage,
            status=student.status,
            created_at=safe_datetime_iso(student.created_at),
            updated_at=safe_datetime_iso(student.updated_at),
        )


def to_document_out(document) -> DocumentOut:
    return DocumentOut(
        id=document.id,
        student_id=document.student_id,
        file_name=document.file_name,
        doc_type=document.doc_type,
        stage=document.stage,
        comment=document.comment,
        created_at=safe_datetime_iso(document.created_at),
    )
