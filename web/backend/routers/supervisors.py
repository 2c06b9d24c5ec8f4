#!/usr/bin/env python3
"""
Supervisor endpoints - CRUD with quota figures.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.assignment import AssignmentCoordinator
from ..dependencies import get_coordinator, get_db
from ..services.supervisor_service import SupervisorService
from ..models.requests import SupervisorCreate, SupervisorUpdate
from ..models.responses import (
    DeleteResponse,
    SupervisorDetailResponse,
    SupervisorResponse,
    SupervisorsResponse,
)

router = APIRouter(prefix="/api/supervisors", tags=["supervisors"])


@router.get("", response_model=SupervisorsResponse)
def list_supervisors(
    available: Optional[bool] = Query(default=None, description="Filter on availability"),
    domain: Optional[str] = Query(default=None, description="Substring of a domain tag"),
    db: Session = Depends(get_db)
):
    service = SupervisorService(db)
    supervisors = service.list_supervisors(available=available, domain=domain)
    return SupervisorsResponse(success=True, count=len(supervisors), supervisors=supervisors)


@router.get("/{supervisor_id}", response_model=SupervisorDetailResponse)
def get_supervisor(supervisor_id: str, db: Session = Depends(get_db)):
    """Get a supervisor with the students they supervise."""
    service = SupervisorService(db)
    return SupervisorDetailResponse(success=True, supervisor=service.get_supervisor(supervisor_id))


@router.post("", response_model=SupervisorResponse, status_code=201)
def create_supervisor(payload: SupervisorCreate, db: Session = Depends(get_db)):
    service = SupervisorService(db)
    supervisor = service.create_supervisor(payload)
    return SupervisorResponse(success=True, message="Supervisor created", supervisor=supervisor)


@router.put("/{supervisor_id}", response_model=SupervisorResponse)
def update_supervisor(supervisor_id: str, payload: SupervisorUpdate, db: Session = Depends(get_db)):
    service = SupervisorService(db)
    supervisor = service.update_supervisor(supervisor_id, payload)
    return SupervisorResponse(success=True, message="Supervisor updated", supervisor=supervisor)


@router.delete("/{supervisor_id}", response_model=DeleteResponse)
def delete_supervisor(
    supervisor_id: str,
    db: Session = Depends(get_db),
    coordinator: AssignmentCoordinator = Depends(get_coordinator)
):
    """Delete a supervisor. Refused with 409 while students are assigned."""
    service = SupervisorService(db, coordinator=coordinator)
    service.delete_supervisor(supervisor_id)
    return DeleteResponse(success=True, message="Supervisor deleted")
