#!/usr/bin/env python3
"""
Supervisor service - business logic for supervisor records.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from core.assignment import AssignmentCoordinator
from core.errors import ConflictError, NotFoundError
from core.matching import normalize_tags
from database.models import Supervisor
from database.repositories import StudentRepository, SupervisorRepository
from ..models.requests import SupervisorCreate, SupervisorUpdate
from ..models.responses import SupervisorDetail, SupervisorOut, StudentRef
from ..utils import safe_datetime_iso

logger = logging.getLogger(__name__)


def to_supervisor_out(supervisor: Supervisor) -> SupervisorOut:
    """Convert ORM model to SupervisorOut response model."""
    return SupervisorOut(
        id=supervisor.id,
        last_name=supervisor.last_name,
        first_name=supervisor.first_name,
        email=supervisor.email,
        domains=list(supervisor.domains or []),
        max_quota=supervisor.max_quota,
        current_load=supervisor.current_load,
        remaining_capacity=supervisor.remaining_capacity,
        fill_rate=supervisor.fill_rate,
        available=bool(supervisor.available),
        biography=supervisor.biography,
        created_at=safe_datetime_iso(supervisor.created_at),
        updated_at=safe_datetime_iso(supervisor.updated_at),
    )


class SupervisorService:
    """Service for managing supervisors."""

    def __init__(self, db: Session, coordinator: Optional[AssignmentCoordinator] = None):
        self.db = db
        self.supervisors = SupervisorRepository(db)
        self.students = StudentRepository(db)
        self.coordinator = coordinator

    def list_supervisors(
        self,
        available: Optional[bool] = None,
        domain: Optional[str] = None
    ) -> List[SupervisorOut]:
        """
        Get supervisors, optionally filtered.

        Args:
            available: Keep only supervisors with this availability flag.
            domain: Case-insensitive substring matched against domain tags.

        Returns:
            List of supervisors ordered by last name.
        """
        return [to_supervisor_out(s) for s in self.supervisors.search(available=available, domain=domain)]

    def get_supervisor(self, supervisor_id: str) -> SupervisorDetail:
        supervisor = self._get(supervisor_id)
        students = self.students.find_by_supervisor(supervisor_id)

        return SupervisorDetail(
            **to_supervisor_out(supervisor).model_dump(),
            students=[
                StudentRef(
                    id=s.id,
                    last_name=s.last_name,
                    first_name=s.first_name,
                    thesis_title=s.thesis_title,
                    current_stage=s.current_stage,
                    status=s.status,
                )
                for s in students
            ],
        )

    def create_supervisor(self, payload: SupervisorCreate) -> SupervisorOut:
        email = payload.email.strip().lower()
        if self.supervisors.find_by_email(email):
            raise ConflictError("A supervisor with this email already exists")

        supervisor = self.supervisors.create(
            last_name=payload.last_name,
            first_name=payload.first_name,
            email=email,
            domains=normalize_tags(payload.domains),
            max_quota=payload.max_quota,
            current_load=0,
            available=payload.available,
            biography=payload.biography,
        )
        self.db.commit()

        logger.info(f"Created supervisor {supervisor.id} ({email})")
        return to_supervisor_out(supervisor)

    def update_supervisor(self, supervisor_id: str, payload: SupervisorUpdate) -> SupervisorOut:
        """
        Update profile fields, tags, availability and quota.

        Lowering max_quota below the current load is allowed; the supervisor
        simply stops receiving new students until the load drops.
        """
        self._get(supervisor_id)
        updates = payload.model_dump(exclude_unset=True)

        if 'email' in updates and updates['email'] is not None:
            email = updates['email'].strip().lower()
            duplicate = self.supervisors.find_one(Supervisor.email == email, Supervisor.id != supervisor_id)
            if duplicate:
                raise ConflictError("This email is already in use")
            updates['email'] = email
        if 'domains' in updates:
            updates['domains'] = normalize_tags(updates['domains'])

        # Never null out required columns through a partial update.
        updates = {k: v for k, v in updates.items() if v is not None or k == 'biography'}

        supervisor = self.supervisors.update(supervisor_id, updates)
        self.db.commit()
        return to_supervisor_out(supervisor)

    def delete_supervisor(self, supervisor_id: str) -> None:
        self.coordinator.delete_supervisor(supervisor_id)

    def _get(self, supervisor_id: str) -> Supervisor:
        supervisor = self.supervisors.find_by_id(supervisor_id)
        if not supervisor:
            raise NotFoundError(f"Supervisor {supervisor_id} not found")
        return supervisor
