#!/usr/bin/env python3
"""
Workflow service - stage catalog and student stage transitions.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from core.errors import ConflictError, NotFoundError, ValidationError
from database.models import StudentStatus, WorkflowStage
from database.repositories import StudentRepository, WorkflowStageRepository
from ..models.requests import StageCreate, StageUpdate
from ..models.responses import StageOut

logger = logging.getLogger(__name__)


def to_stage_out(stage: WorkflowStage) -> StageOut:
    return StageOut(
        id=stage.id,
        code=stage.code,
        label=stage.label,
        description=stage.description,
        position=stage.position,
        active=bool(stage.active),
    )


class WorkflowService:
    """Service for the workflow stage catalog."""

    def __init__(self, db: Session):
        self.db = db
        self.stages = WorkflowStageRepository(db)
        self.students = StudentRepository(db)

    def list_stages(self, active_only: bool = False) -> List[StageOut]:
        return [to_stage_out(s) for s in self.stages.list_ordered(active_only=active_only)]

    def create_stage(self, payload: StageCreate) -> StageOut:
        if self.stages.find_by_code(payload.code):
            raise ConflictError(f'A stage with code "{payload.code}" already exists')

        stage = self.stages.create(**payload.model_dump())
        self.db.commit()
        logger.info(f"Created workflow stage {stage.code} at position {stage.position}")
        return to_stage_out(stage)

    def update_stage(self, stage_id: str, payload: StageUpdate) -> StageOut:
        """Update label, description, position or active flag. The code is immutable."""
        if not self.stages.find_by_id(stage_id):
            raise NotFoundError(f"Stage {stage_id} not found")

        updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items()
                   if v is not None or k == 'description'}
        stage = self.stages.update(stage_id, updates)
        self.db.commit()
        return to_stage_out(stage)

    def delete_stage(self, stage_id: str) -> None:
        if not self.stages.delete(stage_id):
            raise NotFoundError(f"Stage {stage_id} not found")
        self.db.commit()

    def set_student_stage(
        self,
        student_id: str,
        stage_code: Optional[str],
        status: Optional[str] = None
    ):
        """
        Move a student to a stage and optionally set their status.

        Raises:
            ValidationError: Missing or unknown stage code, or invalid status.
            NotFoundError: Unknown student.
        """
        if not stage_code:
            raise ValidationError("The stage code is required")

        student = self.students.find_by_id(student_id)
        if not student:
            raise NotFoundError(f"Student {student_id} not found")

        if not self.stages.find_by_code(stage_code):
            raise ValidationError(f"Unknown stage: {stage_code}")

        updates = {'current_stage': stage_code}
        if status:
            if status not in StudentStatus.values():
                raise ValidationError(
                    f"Invalid status. Allowed values: {', '.join(StudentStatus.values())}"
                )
            updates['status'] = status

        student = self.students.update(student_id, updates)
        self.db.commit()

        logger.info(f"Student {student_id} moved to stage {stage_code} (status={student.status})")
        return student
