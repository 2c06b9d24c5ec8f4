#!/usr/bin/env python3
"""
Workflow endpoints - stage catalog and student progression.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..services.workflow_service import WorkflowService
from ..models.requests import StageAdvanceRequest, StageCreate, StageUpdate
from ..models.responses import (
    DeleteResponse,
    StageResponse,
    StagesResponse,
    StudentStageResponse,
)

router = APIRouter(prefix="/api/workflow", tags=["workflow"])


@router.get("/stages", response_model=StagesResponse)
def list_stages(
    active_only: bool = Query(default=False, description="Only return active stages"),
    db: Session = Depends(get_db)
):
    """List workflow stages ordered by position."""
    stages = WorkflowService(db).list_stages(active_only=active_only)
    return StagesResponse(success=True, count=len(stages), stages=stages)


@router.post("/stages", response_model=StageResponse, status_code=201)
def create_stage(payload: StageCreate, db: Session = Depends(get_db)):
    stage = WorkflowService(db).create_stage(payload)
    return StageResponse(success=True, message="Stage created", stage=stage)


@router.put("/stages/{stage_id}", response_model=StageResponse)
def update_stage(stage_id: str, payload: StageUpdate, db: Session = Depends(get_db)):
    stage = WorkflowService(db).update_stage(stage_id, payload)
    return StageResponse(success=True, message="Stage updated", stage=stage)


@router.delete("/stages/{stage_id}", response_model=DeleteResponse)
def delete_stage(stage_id: str, db: Session = Depends(get_db)):
    WorkflowService(db).delete_stage(stage_id)
    return DeleteResponse(success=True, message="Stage deleted")


@router.put("/students/{student_id}/stage", response_model=StudentStageResponse)
def set_student_stage(student_id: str, payload: StageAdvanceRequest, db: Session = Depends(get_db)):
    """
    Move a student to a workflow stage.

    Returns 400 for an unknown stage code or an invalid status.
    """
    student = WorkflowService(db).set_student_stage(student_id, payload.stage, payload.status)
    return StudentStageResponse(
        success=True,
        message="Stage updated",
        student_id=student.id,
        current_stage=student.current_stage,
        status=student.status,
    )
