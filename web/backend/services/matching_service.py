#!/usr/bin/env python3
"""
Matching service - ranked supervisor suggestions for a student.

Read-only: nothing here writes to the database.
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from core.matching import rank_supervisors
from database.repositories import StudentRepository, SupervisorRepository
from ..models.responses import MatchingStudent, Suggestion, SuggestionsResponse
from .supervisor_service import to_supervisor_out

logger = logging.getLogger(__name__)


class MatchingService:
    """Service for supervisor suggestions."""

    def __init__(self, db: Session):
        self.db = db
        self.students = StudentRepository(db)
        self.supervisors = SupervisorRepository(db)

    def get_suggestions(self, student_id: str, top_k: Optional[int] = None) -> SuggestionsResponse:
        """
        Rank available supervisors for a student's domain tags.

        Args:
            student_id: The student ID.
            top_k: Maximum number of suggestions.

        Returns:
            Suggestions sorted by composite score (highest first).

        Raises:
            NotFoundError: If the student does not exist.
        """
        student = self.students.find_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student {student_id} not found")

        ranked = rank_supervisors(student.domains, self.supervisors.find_all(), top_k=top_k)
        logger.debug(f"Ranked {len(ranked)} supervisors for student {student_id}")

        return SuggestionsResponse(
            success=True,
            student=MatchingStudent(
                id=student.id,
                last_name=student.last_name,
                first_name=student.first_name,
                thesis_title=student.thesis_title,
                domains=list(student.domains or []),
            ),
            count=len(ranked),
            suggestions=[
                Suggestion(
                    supervisor=to_supervisor_out(r.supervisor),
                    score=r.match.score,
                    topical_score=r.match.topical_score,
                    capacity_score=r.match.capacity_score,
                    common_domains=r.match.common_domains,
                    remaining_capacity=r.match.remaining_capacity,
                )
                for r in ranked
            ],
        )
