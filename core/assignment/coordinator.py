#!/usr/bin/env python3
"""
Assignment Coordinator - owner of the student/supervisor quota invariant.

For every supervisor, ``current_load`` must equal the number of students whose
``supervisor_id`` points at it. Every path that changes either side goes
through this class:

- assign:   UNASSIGNED or ASSIGNED(a) -> ASSIGNED(b)
- unassign: ASSIGNED(a) -> UNASSIGNED
- delete_student / delete_supervisor

Each transition runs in a single unit of work (one commit, rollback on any
error) and under the configured lock strategy. Preconditions are checked in a
fixed order and raise before anything is written.
"""

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import sessionmaker

from core.assignment.dto import AssignmentResult, StudentDTO, SupervisorDTO
from core.assignment.locking import (
    KeyedLockStrategy,
    LockStrategy,
    student_key,
    supervisor_key,
)
from core.assignment.reconcile import LoadDrift, reconcile_loads
from core.errors import ConflictError, NotFoundError, ValidationError
from core.matching.scorer import is_eligible
from database.models import StudentStatus
from database.uow import Store, store_uow

logger = logging.getLogger(__name__)


def _require(value: Optional[str], name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return str(value).strip()


class AssignmentCoordinator:
    """Applies supervisor assignments while keeping loads consistent."""

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        locks: Optional[LockStrategy] = None,
        uow: Callable = store_uow
    ):
        self._session_factory = session_factory
        self._locks = locks if locks is not None else KeyedLockStrategy()
        self._uow_factory = uow

    def _uow(self):
        return self._uow_factory(self._session_factory)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def assign(self, student_id: str, supervisor_id: str) -> AssignmentResult:
        """
        Assign (or reassign) a supervisor to a student.

        Raises:
            ValidationError: Missing identifier.
            NotFoundError: Unknown student or supervisor.
            ConflictError: Supervisor unavailable or at quota.
        """
        student_id = _require(student_id, "student_id")
        supervisor_id = _require(supervisor_id, "supervisor_id")

        with self._locks.hold(student_key(student_id)):
            # The previous supervisor must be known before its lock is taken.
            previous_id = self._peek_supervisor_id(student_id)
            with self._locks.hold(supervisor_key(previous_id), supervisor_key(supervisor_id)):
                with self._uow() as store:
                    return self._assign(store, student_id, supervisor_id)

    def unassign(self, student_id: str) -> AssignmentResult:
        """
        Remove the student's supervisor and put the student back to PENDING.

        Raises:
            ValidationError: Missing identifier.
            NotFoundError: Unknown student.
            ConflictError: Student has no supervisor.
        """
        student_id = _require(student_id, "student_id")

        with self._locks.hold(student_key(student_id)):
            previous_id = self._peek_supervisor_id(student_id)
            with self._locks.hold(supervisor_key(previous_id)):
                with self._uow() as store:
                    return self._unassign(store, student_id)

    def delete_student(self, student_id: str) -> int:
        """
        Delete a student, their documents, and release their supervisor slot.

        Returns:
            Number of documents deleted with the student.
        """
        student_id = _require(student_id, "student_id")

        with self._locks.hold(student_key(student_id)):
            previous_id = self._peek_supervisor_id(student_id)
            with self._locks.hold(supervisor_key(previous_id)):
                with self._uow() as store:
                    student = self._get_student(store, student_id)
                    if student.supervisor_id:
                        self._release(store, student.supervisor_id)
                    removed = store.documents.delete_for_student(student_id)
                    store.students.delete(student_id)
                self._locks.forget(student_key(student_id))

        logger.info(f"Deleted student {student_id} ({removed} documents)")
        return removed

    def delete_supervisor(self, supervisor_id: str) -> None:
        """
        Delete a supervisor that no longer supervises anybody.

        Raises:
            NotFoundError: Unknown supervisor.
            ConflictError: Students are still assigned.
        """
        supervisor_id = _require(supervisor_id, "supervisor_id")

        with self._locks.hold(supervisor_key(supervisor_id)):
            with self._uow() as store:
                if store.supervisors.find_by_id(supervisor_id) is None:
                    raise NotFoundError(f"Supervisor {supervisor_id} not found")

                assigned = len(store.students.find_by_supervisor(supervisor_id))
                if assigned > 0:
                    logger.warning(f"Refused to delete supervisor {supervisor_id}: {assigned} students assigned")
                    raise ConflictError(
                        "Cannot delete this supervisor",
                        detail=f"{assigned} student(s) are still assigned. Reassign them first.",
                    )
                store.supervisors.delete(supervisor_id)
            self._locks.forget(supervisor_key(supervisor_id))

        logger.info(f"Deleted supervisor {supervisor_id}")

    def reconcile(self, apply: bool = False) -> List[LoadDrift]:
        """Recompute loads from student references under all supervisor locks."""
        with self._uow() as store:
            keys = [supervisor_key(s.id) for s in store.supervisors.find_all()]

        with self._locks.hold(*keys):
            with self._uow() as store:
                return reconcile_loads(store, apply=apply)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def _peek_supervisor_id(self, student_id: str) -> Optional[str]:
        with self._uow() as store:
            return self._get_student(store, student_id).supervisor_id

    def _get_student(self, store: Store, student_id: str):
        student = store.students.find_by_id(student_id)
        if student is None:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def _assign(self, store: Store, student_id: str, supervisor_id: str) -> AssignmentResult:
        student = self._get_student(store, student_id)

        supervisor = store.supervisors.find_by_id(supervisor_id)
        if supervisor is None:
            raise NotFoundError(f"Supervisor {supervisor_id} not found")

        if not is_eligible(supervisor):
            if not supervisor.available:
                logger.warning(f"Assign {student_id} -> {supervisor_id} refused: supervisor unavailable")
                raise ConflictError("This supervisor is marked as unavailable")
            logger.warning(
                f"Assign {student_id} -> {supervisor_id} refused: quota reached "
                f"({supervisor.current_load}/{supervisor.max_quota})"
            )
            raise ConflictError(
                "Quota atteint",
                detail=f"This supervisor has reached the maximum quota ({supervisor.max_quota} theses)",
            )

        previous_id = student.supervisor_id
        in_progress = StudentStatus.IN_PROGRESS.value

        if previous_id == supervisor_id:
            # Same supervisor: neither counter moves.
            store.students.update(student_id, {'status': in_progress})
        else:
            if previous_id:
                self._release(store, previous_id)
            store.students.update(student_id, {'supervisor_id': supervisor_id, 'status': in_progress})
            store.supervisors.update(supervisor_id, {'current_load': supervisor.current_load + 1})

        logger.info(
            f"Assigned student {student_id} to supervisor {supervisor_id} "
            f"(previous={previous_id}, load={supervisor.current_load}/{supervisor.max_quota})"
        )
        return AssignmentResult(
            student=StudentDTO.from_record(student),
            supervisor=SupervisorDTO.from_record(supervisor),
        )

    def _unassign(self, store: Store, student_id: str) -> AssignmentResult:
        student = self._get_student(store, student_id)

        previous_id = student.supervisor_id
        if not previous_id:
            logger.warning(f"Unassign {student_id} refused: no supervisor assigned")
            raise ConflictError("This student has no assigned supervisor")

        released = self._release(store, previous_id)
        store.students.update(student_id, {
            'supervisor_id': None,
            'status': StudentStatus.PENDING.value,
        })

        logger.info(f"Unassigned student {student_id} from supervisor {previous_id}")
        return AssignmentResult(
            student=StudentDTO.from_record(student),
            supervisor=SupervisorDTO.from_record(released) if released is not None else None,
        )

    def _release(self, store: Store, supervisor_id: str):
        """Give back one slot, never going below zero."""
        supervisor = store.supervisors.find_by_id(supervisor_id)
        if supervisor is None:
            logger.warning(f"Student referenced missing supervisor {supervisor_id}; nothing to release")
            return None

        if supervisor.current_load <= 0:
            logger.warning(f"Supervisor {supervisor_id} load already 0 on release; run reconcile")
            return supervisor

        return store.supervisors.update(supervisor_id, {'current_load': supervisor.current_load - 1})
