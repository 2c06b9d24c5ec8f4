#!/usr/bin/env python3
"""
Matching endpoints - supervisor suggestions and assignments.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.assignment import AssignmentCoordinator, AssignmentResult
from ..config import get_config
from ..dependencies import get_coordinator, get_db
from ..services.matching_service import MatchingService
from ..models.requests import AssignRequest
from ..models.responses import (
    AssignedStudent,
    AssignedSupervisor,
    Assignment,
    AssignmentResponse,
    LoadDriftOut,
    ReconcileResponse,
    SuggestionsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matching", tags=["matching"])


def _to_assignment(result: AssignmentResult) -> Assignment:
    student = result.student
    supervisor = result.supervisor
    return Assignment(
        student=AssignedStudent(
            id=student.id,
            last_name=student.last_name,
            first_name=student.first_name,
            supervisor_id=student.supervisor_id,
            status=student.status,
        ),
        supervisor=AssignedSupervisor(
            id=supervisor.id,
            last_name=supervisor.last_name,
            first_name=supervisor.first_name,
            current_load=supervisor.current_load,
            max_quota=supervisor.max_quota,
        ) if supervisor else None,
    )


@router.post("/reconcile", response_model=ReconcileResponse)
def reconcile_loads(
    apply: bool = Query(default=False, description="Write the recomputed loads"),
    coordinator: AssignmentCoordinator = Depends(get_coordinator)
):
    """
    Compare stored supervisor loads with the actual number of assigned students.

    Without ``apply`` this is a dry run that only reports the drift.
    """
    drifts = coordinator.reconcile(apply=apply)
    return ReconcileResponse(
        success=True,
        applied=apply,
        count=len(drifts),
        drifts=[
            LoadDriftOut(supervisor_id=d.supervisor_id, stored_load=d.stored_load, actual_load=d.actual_load)
            for d in drifts
        ],
    )


@router.post("/assign", response_model=AssignmentResponse)
def assign_supervisor(
    request: AssignRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator)
):
    """
    Assign a supervisor to a student, or move the student to another supervisor.

    Fails with 409 if the supervisor is unavailable or has reached its quota.
    """
    result = coordinator.assign(request.student_id, request.supervisor_id)
    return AssignmentResponse(
        success=True,
        message="Supervisor assigned",
        assignment=_to_assignment(result),
    )


@router.delete("/assign/{student_id}", response_model=AssignmentResponse)
def unassign_supervisor(
    student_id: str,
    coordinator: AssignmentCoordinator = Depends(get_coordinator)
):
    """Remove a student's supervisor and free the slot."""
    result = coordinator.unassign(student_id)
    return AssignmentResponse(
        success=True,
        message="Supervisor unassigned",
        assignment=_to_assignment(result),
    )


@router.get("/{student_id}", response_model=SuggestionsResponse)
def get_suggestions(
    student_id: str,
    top_k: Optional[int] = Query(default=None, ge=1, le=500, description="Maximum suggestions to return"),
    db: Session = Depends(get_db)
):
    """
    Get ranked supervisor suggestions for a student.

    Unavailable and full supervisors are never suggested.
    """
    effective_top_k = top_k if top_k is not None else get_config().matching.result_policy.top_k

    service = MatchingService(db)
    return service.get_suggestions(student_id, top_k=effective_top_k)
