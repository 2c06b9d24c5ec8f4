"""Data Transfer Objects for assignment results.

Built while the unit of work is still open so callers can use them after the
session is closed.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class SupervisorDTO:
    id: str
    last_name: str
    first_name: str
    email: str
    domains: List[str] = field(default_factory=list)
    max_quota: int = 0
    current_load: int = 0
    available: bool = True

    @classmethod
    def from_record(cls, record: Any) -> "SupervisorDTO":
        return cls(
            id=record.id,
            last_name=record.last_name,
            first_name=record.first_name,
            email=record.email,
            domains=list(record.domains or []),
            max_quota=record.max_quota,
            current_load=record.current_load,
            available=bool(record.available),
        )


@dataclass
class StudentDTO:
    id: str
    last_name: str
    first_name: str
    email: str
    domains: List[str] = field(default_factory=list)
    supervisor_id: Optional[str] = None
    current_stage: str = ""
    status: str = ""

    @classmethod
    def from_record(cls, record: Any) -> "StudentDTO":
        return cls(
            id=record.id,
            last_name=record.last_name,
            first_name=record.first_name,
            email=record.email,
            domains=list(record.domains or []),
            supervisor_id=record.supervisor_id,
            current_stage=record.current_stage,
            status=record.status,
        )


@dataclass
class AssignmentResult:
    """Outcome of assign/unassign.

    For unassign, ``supervisor`` is the supervisor that was released, or None
    if the student pointed at a supervisor that no longer exists.
    """
    student: StudentDTO
    supervisor: Optional[SupervisorDTO]
